"""MemberApplicationService — member CRUD plus the deposit-backed views.

The deposit repository is needed for the deletion guard and for the
"members with deposits" listing. Writes commit or roll back here.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_common.datetime_utils import ensure_utc, utc_now
from src.cf_common.errors import MemberHasDepositsError, MemberNotFoundError
from src.cf_common.id_generator import generate_id
from src.cf_deposit.domain.repository import DepositRepositoryProtocol
from src.cf_deposit.infrastructure.persistence import DepositRepository
from src.cf_member.application.schemas import (
    MemberCreateRequest,
    MemberResponse,
    MemberUpdateRequest,
    MemberWithDepositsResponse,
)
from src.cf_member.domain.models import MemberChanges
from src.cf_member.domain.repository import MemberRepositoryProtocol
from src.cf_member.infrastructure.persistence import MemberRepository
from src.cf_summary.domain.aggregation import member_deposit_totals

logger = logging.getLogger(__name__)


class MemberApplicationService:
    def __init__(
        self,
        repo: MemberRepositoryProtocol | None = None,
        deposit_repo: DepositRepositoryProtocol | None = None,
    ) -> None:
        self._repo: MemberRepositoryProtocol = repo or MemberRepository()
        self._deposit_repo: DepositRepositoryProtocol = deposit_repo or DepositRepository()

    async def list_members(self, db: AsyncSession) -> list[MemberResponse]:
        members = await self._repo.list_members(db)
        return [MemberResponse.from_domain(m) for m in members]

    async def list_members_with_deposits(
        self, db: AsyncSession
    ) -> list[MemberWithDepositsResponse]:
        members = await self._repo.list_members(db)
        deposits = await self._deposit_repo.list_deposits(db)
        return [
            MemberWithDepositsResponse.from_total(row.member, row.total_deposit)
            for row in member_deposit_totals(members, deposits)
        ]

    async def get_member(self, db: AsyncSession, member_id: str) -> MemberResponse:
        member = await self._repo.get_member_by_id(db, member_id)
        if member is None:
            raise MemberNotFoundError(member_id)
        return MemberResponse.from_domain(member)

    async def create_member(
        self, db: AsyncSession, req: MemberCreateRequest
    ) -> MemberResponse:
        join_date = ensure_utc(req.join_date) if req.join_date else utc_now()
        try:
            member = await self._repo.insert_member(
                db,
                member_id=generate_id(),
                name=req.name,
                phone_number=req.phone_number,
                is_active=req.is_active,
                join_date=join_date,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Member created: %s", member.id)
        return MemberResponse.from_domain(member)

    async def update_member(
        self, db: AsyncSession, member_id: str, req: MemberUpdateRequest
    ) -> MemberResponse:
        changes = MemberChanges(
            name=req.name,
            phone_number=req.phone_number,
            is_active=req.is_active,
            join_date=ensure_utc(req.join_date) if req.join_date else None,
        )
        try:
            member = await self._repo.update_member(db, member_id, changes)
            if member is None:
                raise MemberNotFoundError(member_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return MemberResponse.from_domain(member)

    async def delete_member(self, db: AsyncSession, member_id: str) -> None:
        try:
            if await self._repo.get_member_by_id(db, member_id) is None:
                raise MemberNotFoundError(member_id)
            if await self._deposit_repo.count_deposits_for_member(db, member_id) > 0:
                raise MemberHasDepositsError(member_id)
            try:
                deleted = await self._repo.delete_member(db, member_id)
            except IntegrityError:
                # A deposit slipped in after the count; the FK refuses the delete.
                raise MemberHasDepositsError(member_id) from None
            if not deleted:
                raise MemberNotFoundError(member_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Member deleted: %s", member_id)

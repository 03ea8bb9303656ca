"""DepositApplicationService — deposit CRUD and the deposit summary.

Creation checks the member exists before inserting; the FK on
deposits.member_id backs that up if the member vanishes in between.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_common.datetime_utils import ensure_utc, utc_now
from src.cf_common.errors import DepositNotFoundError, MemberNotFoundError
from src.cf_common.id_generator import generate_id
from src.cf_deposit.application.schemas import (
    DepositCreateRequest,
    DepositResponse,
    DepositSummaryResponse,
    DepositUpdateRequest,
)
from src.cf_deposit.domain.models import DepositChanges
from src.cf_deposit.domain.repository import DepositRepositoryProtocol
from src.cf_deposit.infrastructure.persistence import DepositRepository
from src.cf_member.domain.repository import MemberRepositoryProtocol
from src.cf_member.infrastructure.persistence import MemberRepository
from src.cf_summary.domain.aggregation import summarize_deposits

logger = logging.getLogger(__name__)


class DepositApplicationService:
    def __init__(
        self,
        repo: DepositRepositoryProtocol | None = None,
        member_repo: MemberRepositoryProtocol | None = None,
    ) -> None:
        self._repo: DepositRepositoryProtocol = repo or DepositRepository()
        self._member_repo: MemberRepositoryProtocol = member_repo or MemberRepository()

    async def list_deposits(self, db: AsyncSession) -> list[DepositResponse]:
        deposits = await self._repo.list_deposits(db)
        return [DepositResponse.from_domain(d) for d in deposits]

    async def list_member_deposits(
        self, db: AsyncSession, member_id: str
    ) -> list[DepositResponse]:
        deposits = await self._repo.list_deposits_by_member(db, member_id)
        return [DepositResponse.from_domain(d) for d in deposits]

    async def get_deposit(self, db: AsyncSession, deposit_id: str) -> DepositResponse:
        deposit = await self._repo.get_deposit_by_id(db, deposit_id)
        if deposit is None:
            raise DepositNotFoundError(deposit_id)
        return DepositResponse.from_domain(deposit)

    async def get_summary(self, db: AsyncSession) -> DepositSummaryResponse:
        deposits = await self._repo.list_deposits(db)
        members = await self._member_repo.list_members(db)
        return DepositSummaryResponse.from_summary(summarize_deposits(deposits, members))

    async def create_deposit(
        self, db: AsyncSession, req: DepositCreateRequest
    ) -> DepositResponse:
        try:
            if await self._member_repo.get_member_by_id(db, req.member_id) is None:
                raise MemberNotFoundError(req.member_id)
            try:
                deposit = await self._repo.insert_deposit(
                    db,
                    deposit_id=generate_id(),
                    member_id=req.member_id,
                    amount=req.amount,
                    date=ensure_utc(req.date) if req.date else utc_now(),
                    status=req.status.value,
                    notes=req.notes,
                )
            except IntegrityError:
                raise MemberNotFoundError(req.member_id) from None
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Deposit created: %s member=%s amount=%s", deposit.id, deposit.member_id, deposit.amount)
        return DepositResponse.from_domain(deposit)

    async def update_deposit(
        self, db: AsyncSession, deposit_id: str, req: DepositUpdateRequest
    ) -> DepositResponse:
        changes = DepositChanges(
            amount=req.amount,
            date=ensure_utc(req.date) if req.date else None,
            status=req.status.value if req.status else None,
            notes=req.notes,
        )
        try:
            deposit = await self._repo.update_deposit(db, deposit_id, changes)
            if deposit is None:
                raise DepositNotFoundError(deposit_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return DepositResponse.from_domain(deposit)

    async def delete_deposit(self, db: AsyncSession, deposit_id: str) -> None:
        try:
            if not await self._repo.delete_deposit(db, deposit_id):
                raise DepositNotFoundError(deposit_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Deposit deleted: %s", deposit_id)

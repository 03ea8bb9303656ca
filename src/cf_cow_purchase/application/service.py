"""CowPurchaseApplicationService — purchases, their participants and receipts.

Record and receipt file are not updated atomically. The record mutation is
authoritative:
  create  store new file -> insert -> commit   (failure: remove new file)
  update  store new file -> update -> commit -> remove old file
  delete  delete -> commit -> remove file
File removal after commit is best-effort; a failure only leaves an orphaned
file behind and is logged by the storage layer.
"""

import logging

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_common.datetime_utils import ensure_utc, utc_now
from src.cf_common.errors import CowPurchaseNotFoundError, MemberNotFoundError
from src.cf_common.id_generator import generate_id
from src.cf_cow_purchase.application.schemas import (
    CowPurchaseCreateRequest,
    CowPurchaseResponse,
    CowPurchaseSummaryResponse,
    CowPurchaseUpdateRequest,
)
from src.cf_cow_purchase.domain.models import CowPurchase, CowPurchaseChanges
from src.cf_cow_purchase.domain.repository import (
    CowPurchaseRepositoryProtocol,
    ReceiptStorageProtocol,
)
from src.cf_cow_purchase.infrastructure.persistence import CowPurchaseRepository
from src.cf_cow_purchase.infrastructure.receipt_storage import ReceiptStorage
from src.cf_member.domain.models import Member
from src.cf_member.domain.repository import MemberRepositoryProtocol
from src.cf_member.infrastructure.persistence import MemberRepository
from src.cf_summary.domain.aggregation import resolve_participants, summarize_cow_purchases

logger = logging.getLogger(__name__)


class CowPurchaseApplicationService:
    def __init__(
        self,
        repo: CowPurchaseRepositoryProtocol | None = None,
        member_repo: MemberRepositoryProtocol | None = None,
        storage: ReceiptStorageProtocol | None = None,
    ) -> None:
        self._repo: CowPurchaseRepositoryProtocol = repo or CowPurchaseRepository()
        self._member_repo: MemberRepositoryProtocol = member_repo or MemberRepository()
        self._storage: ReceiptStorageProtocol = storage or ReceiptStorage()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_cow_purchases(self, db: AsyncSession) -> list[CowPurchaseResponse]:
        purchases = await self._repo.list_cow_purchases(db)
        members = await self._member_repo.list_members(db)
        return [self._to_response(p, members) for p in purchases]

    async def get_cow_purchase(
        self, db: AsyncSession, purchase_id: str
    ) -> CowPurchaseResponse:
        purchase = await self._repo.get_cow_purchase_by_id(db, purchase_id)
        if purchase is None:
            raise CowPurchaseNotFoundError(purchase_id)
        members = await self._member_repo.get_members_by_ids(
            db, purchase.participating_member_ids
        )
        return self._to_response(purchase, members)

    async def get_summary(self, db: AsyncSession) -> CowPurchaseSummaryResponse:
        purchases = await self._repo.list_cow_purchases(db)
        members = await self._member_repo.list_members(db)
        return CowPurchaseSummaryResponse.from_summary(
            summarize_cow_purchases(purchases, members)
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_cow_purchase(
        self,
        db: AsyncSession,
        req: CowPurchaseCreateRequest,
        receipt: UploadFile | None = None,
    ) -> CowPurchaseResponse:
        members = await self._require_members(db, req.participating_members)
        receipt_path = await self._storage.save(receipt) if receipt is not None else None
        try:
            purchase = await self._repo.insert_cow_purchase(
                db,
                purchase_id=generate_id(),
                date=ensure_utc(req.date) if req.date else utc_now(),
                amount=req.amount,
                participating_member_ids=req.participating_members,
                notes=req.notes,
                receipt_image=receipt_path,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            if receipt_path:
                await self._storage.delete(receipt_path)
            raise
        logger.info("Cow purchase created: %s amount=%s", purchase.id, purchase.amount)
        return self._to_response(purchase, members)

    async def update_cow_purchase(
        self,
        db: AsyncSession,
        purchase_id: str,
        req: CowPurchaseUpdateRequest,
        receipt: UploadFile | None = None,
    ) -> CowPurchaseResponse:
        existing = await self._repo.get_cow_purchase_by_id(db, purchase_id)
        if existing is None:
            raise CowPurchaseNotFoundError(purchase_id)
        if req.participating_members is not None:
            await self._require_members(db, req.participating_members)

        new_path = await self._storage.save(receipt) if receipt is not None else None
        changes = CowPurchaseChanges(
            amount=req.amount,
            date=ensure_utc(req.date) if req.date else None,
            notes=req.notes,
            receipt_image=new_path,
            participating_member_ids=req.participating_members,
        )
        try:
            purchase = await self._repo.update_cow_purchase(db, purchase_id, changes)
            if purchase is None:
                raise CowPurchaseNotFoundError(purchase_id)
            await db.commit()
        except Exception:
            await db.rollback()
            if new_path:
                await self._storage.delete(new_path)
            raise

        if new_path and existing.receipt_image and existing.receipt_image != new_path:
            await self._storage.delete(existing.receipt_image)

        members = await self._member_repo.get_members_by_ids(
            db, purchase.participating_member_ids
        )
        return self._to_response(purchase, members)

    async def delete_cow_purchase(self, db: AsyncSession, purchase_id: str) -> None:
        try:
            existing = await self._repo.get_cow_purchase_by_id(db, purchase_id)
            if existing is None or not await self._repo.delete_cow_purchase(db, purchase_id):
                raise CowPurchaseNotFoundError(purchase_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Cow purchase deleted: %s", purchase_id)
        if existing.receipt_image:
            await self._storage.delete(existing.receipt_image)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _require_members(self, db: AsyncSession, member_ids: list[str]) -> list[Member]:
        members = await self._member_repo.get_members_by_ids(db, member_ids)
        found = {m.id for m in members}
        for mid in member_ids:
            if mid not in found:
                raise MemberNotFoundError(mid)
        return members

    @staticmethod
    def _to_response(purchase: CowPurchase, members: list[Member]) -> CowPurchaseResponse:
        return CowPurchaseResponse.from_domain(
            purchase, resolve_participants(purchase.participating_member_ids, members)
        )

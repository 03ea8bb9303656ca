"""Repository and receipt-storage Protocols — dependency inversion for testability.

Unit tests inject mocks that conform to these Protocols.
Infrastructure layer provides the real implementations.
"""

from datetime import datetime
from decimal import Decimal
from typing import Protocol

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_cow_purchase.domain.models import CowPurchase, CowPurchaseChanges


class CowPurchaseRepositoryProtocol(Protocol):
    async def list_cow_purchases(self, db: AsyncSession) -> list[CowPurchase]: ...

    async def get_cow_purchase_by_id(
        self, db: AsyncSession, purchase_id: str
    ) -> CowPurchase | None: ...

    async def insert_cow_purchase(
        self,
        db: AsyncSession,
        purchase_id: str,
        date: datetime,
        amount: Decimal,
        participating_member_ids: list[str],
        notes: str,
        receipt_image: str | None,
    ) -> CowPurchase: ...

    async def update_cow_purchase(
        self, db: AsyncSession, purchase_id: str, changes: CowPurchaseChanges
    ) -> CowPurchase | None: ...

    async def delete_cow_purchase(self, db: AsyncSession, purchase_id: str) -> bool: ...


class ReceiptStorageProtocol(Protocol):
    async def save(self, upload: UploadFile) -> str:
        """Persist the upload; return the public relative path to record."""
        ...

    async def delete(self, path: str) -> bool:
        """Best-effort removal. Returns False (and logs) instead of raising."""
        ...

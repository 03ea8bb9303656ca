"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_deposit.domain.models import Deposit, DepositChanges


class DepositRepositoryProtocol(Protocol):
    async def list_deposits(self, db: AsyncSession) -> list[Deposit]: ...

    async def list_deposits_by_member(
        self, db: AsyncSession, member_id: str
    ) -> list[Deposit]: ...

    async def get_deposit_by_id(self, db: AsyncSession, deposit_id: str) -> Deposit | None: ...

    async def count_deposits_for_member(self, db: AsyncSession, member_id: str) -> int: ...

    async def insert_deposit(
        self,
        db: AsyncSession,
        deposit_id: str,
        member_id: str,
        amount: Decimal,
        date: datetime,
        status: str,
        notes: str,
    ) -> Deposit: ...

    async def update_deposit(
        self, db: AsyncSession, deposit_id: str, changes: DepositChanges
    ) -> Deposit | None: ...

    async def delete_deposit(self, db: AsyncSession, deposit_id: str) -> bool: ...

"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_member.domain.models import Member, MemberChanges


class MemberRepositoryProtocol(Protocol):
    async def list_members(self, db: AsyncSession) -> list[Member]: ...

    async def get_member_by_id(self, db: AsyncSession, member_id: str) -> Member | None: ...

    async def get_members_by_ids(
        self, db: AsyncSession, member_ids: Sequence[str]
    ) -> list[Member]: ...

    async def insert_member(
        self,
        db: AsyncSession,
        member_id: str,
        name: str,
        phone_number: str,
        is_active: bool,
        join_date: datetime,
    ) -> Member: ...

    async def update_member(
        self, db: AsyncSession, member_id: str, changes: MemberChanges
    ) -> Member | None: ...

    async def delete_member(self, db: AsyncSession, member_id: str) -> bool: ...

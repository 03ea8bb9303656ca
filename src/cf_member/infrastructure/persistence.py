"""MemberRepository — concrete implementation of MemberRepositoryProtocol.

All queries use raw text() SQL (no ORM).
asyncpg NULL parameter pattern: CAST(:param AS TYPE) is required so that a
None parameter still has a type; COALESCE(CAST(:x AS T), x) keeps the stored
value when the caller did not supply one.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_common.errors import InternalError
from src.cf_member.domain.models import Member, MemberChanges

_COLUMNS = "id, name, phone_number, is_active, join_date, created_at, updated_at"

_LIST_MEMBERS_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM members
    ORDER BY name ASC, id ASC
""")

_GET_MEMBER_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM members
    WHERE id = :member_id
""")

_GET_MEMBERS_BY_IDS_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM members
    WHERE id = ANY(CAST(:member_ids AS TEXT[]))
""")

_INSERT_MEMBER_SQL = text(f"""
    INSERT INTO members (id, name, phone_number, is_active, join_date)
    VALUES (:member_id, :name, :phone_number, :is_active, :join_date)
    RETURNING {_COLUMNS}
""")

_UPDATE_MEMBER_SQL = text(f"""
    UPDATE members
    SET name         = COALESCE(CAST(:name AS TEXT), name),
        phone_number = COALESCE(CAST(:phone_number AS TEXT), phone_number),
        is_active    = COALESCE(CAST(:is_active AS BOOLEAN), is_active),
        join_date    = COALESCE(CAST(:join_date AS TIMESTAMPTZ), join_date)
    WHERE id = :member_id
    RETURNING {_COLUMNS}
""")

_DELETE_MEMBER_SQL = text("""
    DELETE FROM members
    WHERE id = :member_id
    RETURNING id
""")


def _row_to_member(row: object) -> Member:
    return Member(
        id=row.id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        phone_number=row.phone_number,  # type: ignore[attr-defined]
        is_active=row.is_active,  # type: ignore[attr-defined]
        join_date=row.join_date,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class MemberRepository:
    async def list_members(self, db: AsyncSession) -> list[Member]:
        result = await db.execute(_LIST_MEMBERS_SQL)
        return [_row_to_member(row) for row in result.fetchall()]

    async def get_member_by_id(self, db: AsyncSession, member_id: str) -> Member | None:
        result = await db.execute(_GET_MEMBER_SQL, {"member_id": member_id})
        row = result.fetchone()
        return _row_to_member(row) if row else None

    async def get_members_by_ids(
        self, db: AsyncSession, member_ids: Sequence[str]
    ) -> list[Member]:
        if not member_ids:
            return []
        result = await db.execute(_GET_MEMBERS_BY_IDS_SQL, {"member_ids": list(member_ids)})
        return [_row_to_member(row) for row in result.fetchall()]

    async def insert_member(
        self,
        db: AsyncSession,
        member_id: str,
        name: str,
        phone_number: str,
        is_active: bool,
        join_date: datetime,
    ) -> Member:
        result = await db.execute(
            _INSERT_MEMBER_SQL,
            {
                "member_id": member_id,
                "name": name,
                "phone_number": phone_number,
                "is_active": is_active,
                "join_date": join_date,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Member insert returned no rows")
        return _row_to_member(row)

    async def update_member(
        self, db: AsyncSession, member_id: str, changes: MemberChanges
    ) -> Member | None:
        result = await db.execute(
            _UPDATE_MEMBER_SQL,
            {
                "member_id": member_id,
                "name": changes.name,
                "phone_number": changes.phone_number,
                "is_active": changes.is_active,
                "join_date": changes.join_date,
            },
        )
        row = result.fetchone()
        return _row_to_member(row) if row else None

    async def delete_member(self, db: AsyncSession, member_id: str) -> bool:
        result = await db.execute(_DELETE_MEMBER_SQL, {"member_id": member_id})
        return result.fetchone() is not None

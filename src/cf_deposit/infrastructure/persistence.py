"""DepositRepository — concrete implementation of DepositRepositoryProtocol.

Reads join members so each deposit carries the member's name and phone.
Writes use a CTE (INSERT/UPDATE ... RETURNING, then LEFT JOIN members) so the
returned row has the same shape as reads.

Ordering: date DESC, then insertion order (created_at, id) for equal dates.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_common.errors import InternalError
from src.cf_deposit.domain.models import Deposit, DepositChanges

_SELECT_JOINED = """
    SELECT d.id, d.member_id, d.amount, d.date, d.status, d.notes,
           d.created_at, d.updated_at,
           m.name AS member_name, m.phone_number AS member_phone
"""

_LIST_DEPOSITS_SQL = text(f"""
    {_SELECT_JOINED}
    FROM deposits d
    LEFT JOIN members m ON m.id = d.member_id
    ORDER BY d.date DESC, d.created_at ASC, d.id ASC
""")

_LIST_BY_MEMBER_SQL = text(f"""
    {_SELECT_JOINED}
    FROM deposits d
    LEFT JOIN members m ON m.id = d.member_id
    WHERE d.member_id = :member_id
    ORDER BY d.date DESC, d.created_at ASC, d.id ASC
""")

_GET_DEPOSIT_SQL = text(f"""
    {_SELECT_JOINED}
    FROM deposits d
    LEFT JOIN members m ON m.id = d.member_id
    WHERE d.id = :deposit_id
""")

_COUNT_FOR_MEMBER_SQL = text("""
    SELECT COUNT(*) AS n
    FROM deposits
    WHERE member_id = :member_id
""")

_INSERT_DEPOSIT_SQL = text(f"""
    WITH d AS (
        INSERT INTO deposits (id, member_id, amount, date, status, notes)
        VALUES (:deposit_id, :member_id, :amount, :date, :status, :notes)
        RETURNING id, member_id, amount, date, status, notes, created_at, updated_at
    )
    {_SELECT_JOINED}
    FROM d
    LEFT JOIN members m ON m.id = d.member_id
""")

# member_id is deliberately absent from the SET list.
_UPDATE_DEPOSIT_SQL = text(f"""
    WITH d AS (
        UPDATE deposits
        SET amount = COALESCE(CAST(:amount AS NUMERIC), amount),
            date   = COALESCE(CAST(:date AS TIMESTAMPTZ), date),
            status = COALESCE(CAST(:status AS TEXT), status),
            notes  = COALESCE(CAST(:notes AS TEXT), notes)
        WHERE id = :deposit_id
        RETURNING id, member_id, amount, date, status, notes, created_at, updated_at
    )
    {_SELECT_JOINED}
    FROM d
    LEFT JOIN members m ON m.id = d.member_id
""")

_DELETE_DEPOSIT_SQL = text("""
    DELETE FROM deposits
    WHERE id = :deposit_id
    RETURNING id
""")


def _row_to_deposit(row: object) -> Deposit:
    return Deposit(
        id=row.id,  # type: ignore[attr-defined]
        member_id=row.member_id,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        date=row.date,  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
        notes=row.notes,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
        member_name=row.member_name,  # type: ignore[attr-defined]
        member_phone=row.member_phone,  # type: ignore[attr-defined]
    )


class DepositRepository:
    async def list_deposits(self, db: AsyncSession) -> list[Deposit]:
        result = await db.execute(_LIST_DEPOSITS_SQL)
        return [_row_to_deposit(row) for row in result.fetchall()]

    async def list_deposits_by_member(
        self, db: AsyncSession, member_id: str
    ) -> list[Deposit]:
        result = await db.execute(_LIST_BY_MEMBER_SQL, {"member_id": member_id})
        return [_row_to_deposit(row) for row in result.fetchall()]

    async def get_deposit_by_id(self, db: AsyncSession, deposit_id: str) -> Deposit | None:
        result = await db.execute(_GET_DEPOSIT_SQL, {"deposit_id": deposit_id})
        row = result.fetchone()
        return _row_to_deposit(row) if row else None

    async def count_deposits_for_member(self, db: AsyncSession, member_id: str) -> int:
        result = await db.execute(_COUNT_FOR_MEMBER_SQL, {"member_id": member_id})
        row = result.fetchone()
        return int(row.n) if row else 0

    async def insert_deposit(
        self,
        db: AsyncSession,
        deposit_id: str,
        member_id: str,
        amount: Decimal,
        date: datetime,
        status: str,
        notes: str,
    ) -> Deposit:
        result = await db.execute(
            _INSERT_DEPOSIT_SQL,
            {
                "deposit_id": deposit_id,
                "member_id": member_id,
                "amount": amount,
                "date": date,
                "status": status,
                "notes": notes,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Deposit insert returned no rows")
        return _row_to_deposit(row)

    async def update_deposit(
        self, db: AsyncSession, deposit_id: str, changes: DepositChanges
    ) -> Deposit | None:
        result = await db.execute(
            _UPDATE_DEPOSIT_SQL,
            {
                "deposit_id": deposit_id,
                "amount": changes.amount,
                "date": changes.date,
                "status": changes.status,
                "notes": changes.notes,
            },
        )
        row = result.fetchone()
        return _row_to_deposit(row) if row else None

    async def delete_deposit(self, db: AsyncSession, deposit_id: str) -> bool:
        result = await db.execute(_DELETE_DEPOSIT_SQL, {"deposit_id": deposit_id})
        return result.fetchone() is not None

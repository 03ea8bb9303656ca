"""CowPurchaseRepository — concrete implementation of CowPurchaseRepositoryProtocol.

Participants live in cow_purchase_members(cow_purchase_id, member_id, position);
reads fold them back into an ordered id list with array_agg(... ORDER BY position).
Replacing the participant set deletes the old rows and re-inserts in order.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_common.errors import InternalError
from src.cf_cow_purchase.domain.models import CowPurchase, CowPurchaseChanges

_SELECT_WITH_PARTICIPANTS = """
    SELECT p.id, p.date, p.amount, p.notes, p.receipt_image,
           p.created_at, p.updated_at,
           COALESCE(
               (SELECT array_agg(cpm.member_id ORDER BY cpm.position)
                FROM cow_purchase_members cpm
                WHERE cpm.cow_purchase_id = p.id),
               CAST(ARRAY[] AS TEXT[])
           ) AS participating_member_ids
    FROM cow_purchases p
"""

_LIST_SQL = text(f"""
    {_SELECT_WITH_PARTICIPANTS}
    ORDER BY p.date DESC, p.created_at ASC, p.id ASC
""")

_GET_SQL = text(f"""
    {_SELECT_WITH_PARTICIPANTS}
    WHERE p.id = :purchase_id
""")

_INSERT_SQL = text("""
    INSERT INTO cow_purchases (id, date, amount, notes, receipt_image)
    VALUES (:purchase_id, :date, :amount, :notes, :receipt_image)
    RETURNING id
""")

_UPDATE_SQL = text("""
    UPDATE cow_purchases
    SET amount        = COALESCE(CAST(:amount AS NUMERIC), amount),
        date          = COALESCE(CAST(:date AS TIMESTAMPTZ), date),
        notes         = COALESCE(CAST(:notes AS TEXT), notes),
        receipt_image = COALESCE(CAST(:receipt_image AS TEXT), receipt_image)
    WHERE id = :purchase_id
    RETURNING id
""")

_CLEAR_PARTICIPANTS_SQL = text("""
    DELETE FROM cow_purchase_members
    WHERE cow_purchase_id = :purchase_id
""")

_INSERT_PARTICIPANT_SQL = text("""
    INSERT INTO cow_purchase_members (cow_purchase_id, member_id, position)
    VALUES (:purchase_id, :member_id, :position)
""")

_DELETE_SQL = text("""
    DELETE FROM cow_purchases
    WHERE id = :purchase_id
    RETURNING id
""")


def _row_to_cow_purchase(row: object) -> CowPurchase:
    return CowPurchase(
        id=row.id,  # type: ignore[attr-defined]
        date=row.date,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        participating_member_ids=list(row.participating_member_ids or []),  # type: ignore[attr-defined]
        notes=row.notes,  # type: ignore[attr-defined]
        receipt_image=row.receipt_image,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class CowPurchaseRepository:
    async def list_cow_purchases(self, db: AsyncSession) -> list[CowPurchase]:
        result = await db.execute(_LIST_SQL)
        return [_row_to_cow_purchase(row) for row in result.fetchall()]

    async def get_cow_purchase_by_id(
        self, db: AsyncSession, purchase_id: str
    ) -> CowPurchase | None:
        result = await db.execute(_GET_SQL, {"purchase_id": purchase_id})
        row = result.fetchone()
        return _row_to_cow_purchase(row) if row else None

    async def insert_cow_purchase(
        self,
        db: AsyncSession,
        purchase_id: str,
        date: datetime,
        amount: Decimal,
        participating_member_ids: list[str],
        notes: str,
        receipt_image: str | None,
    ) -> CowPurchase:
        await db.execute(
            _INSERT_SQL,
            {
                "purchase_id": purchase_id,
                "date": date,
                "amount": amount,
                "notes": notes,
                "receipt_image": receipt_image,
            },
        )
        await self._write_participants(db, purchase_id, participating_member_ids)
        purchase = await self.get_cow_purchase_by_id(db, purchase_id)
        if purchase is None:
            raise InternalError("Cow purchase insert returned no rows")
        return purchase

    async def update_cow_purchase(
        self, db: AsyncSession, purchase_id: str, changes: CowPurchaseChanges
    ) -> CowPurchase | None:
        result = await db.execute(
            _UPDATE_SQL,
            {
                "purchase_id": purchase_id,
                "amount": changes.amount,
                "date": changes.date,
                "notes": changes.notes,
                "receipt_image": changes.receipt_image,
            },
        )
        if result.fetchone() is None:
            return None
        if changes.participating_member_ids is not None:
            await db.execute(_CLEAR_PARTICIPANTS_SQL, {"purchase_id": purchase_id})
            await self._write_participants(db, purchase_id, changes.participating_member_ids)
        return await self.get_cow_purchase_by_id(db, purchase_id)

    async def delete_cow_purchase(self, db: AsyncSession, purchase_id: str) -> bool:
        # cow_purchase_members rows go with the purchase (ON DELETE CASCADE)
        result = await db.execute(_DELETE_SQL, {"purchase_id": purchase_id})
        return result.fetchone() is not None

    async def _write_participants(
        self, db: AsyncSession, purchase_id: str, member_ids: list[str]
    ) -> None:
        if not member_ids:
            return
        await db.execute(
            _INSERT_PARTICIPANT_SQL,
            [
                {"purchase_id": purchase_id, "member_id": mid, "position": pos}
                for pos, mid in enumerate(member_ids)
            ],
        )

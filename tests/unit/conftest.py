"""In-memory repositories for API tests.

The fakes honour the repository Protocols closely enough for the routers to
behave as they would against PostgreSQL: ordering, partial updates,
participant cascade on member delete, and the deposit FK restriction.
The ``api`` fixture swaps services built on these fakes into the router
modules and overrides the DB-session dependency.
"""

from dataclasses import replace
from datetime import datetime, timedelta
from itertools import count
from unittest.mock import AsyncMock

import pytest
from fastapi import UploadFile

from src.cf_common.database import get_db_session
from src.cf_common.datetime_utils import utc_now
from src.cf_cow_purchase.api import router as cow_purchase_api
from src.cf_cow_purchase.application.service import CowPurchaseApplicationService
from src.cf_cow_purchase.domain.models import CowPurchase, CowPurchaseChanges
from src.cf_deposit.api import router as deposit_api
from src.cf_deposit.application.service import DepositApplicationService
from src.cf_deposit.domain.models import Deposit, DepositChanges
from src.cf_member.api import router as member_api
from src.cf_member.application.service import MemberApplicationService
from src.cf_member.domain.models import Member, MemberChanges
from src.main import app


def _newest_first(records: list) -> list:
    ordered = sorted(records, key=lambda r: (r.created_at, r.id))
    return sorted(ordered, key=lambda r: r.date, reverse=True)


class InMemoryStore:
    def __init__(self) -> None:
        self.members: dict[str, Member] = {}
        self.deposits: dict[str, Deposit] = {}
        self.purchases: dict[str, CowPurchase] = {}
        self._tick = count()
        self._base = utc_now()

    def stamp(self) -> datetime:
        """Strictly increasing timestamps so insertion order is observable."""
        return self._base + timedelta(microseconds=next(self._tick))


class FakeMemberRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.s = store

    async def list_members(self, db) -> list[Member]:
        return sorted(self.s.members.values(), key=lambda m: (m.name, m.id))

    async def get_member_by_id(self, db, member_id: str) -> Member | None:
        return self.s.members.get(member_id)

    async def get_members_by_ids(self, db, member_ids) -> list[Member]:
        return [self.s.members[mid] for mid in member_ids if mid in self.s.members]

    async def insert_member(self, db, member_id, name, phone_number, is_active, join_date) -> Member:
        now = self.s.stamp()
        member = Member(member_id, name, phone_number, is_active, join_date, now, now)
        self.s.members[member_id] = member
        return member

    async def update_member(self, db, member_id: str, changes: MemberChanges) -> Member | None:
        current = self.s.members.get(member_id)
        if current is None:
            return None
        fields = {k: v for k, v in vars(changes).items() if v is not None}
        updated = replace(current, **fields, updated_at=self.s.stamp())
        self.s.members[member_id] = updated
        return updated

    async def delete_member(self, db, member_id: str) -> bool:
        if any(d.member_id == member_id for d in self.s.deposits.values()):
            raise AssertionError("deposit FK would block this delete")
        if self.s.members.pop(member_id, None) is None:
            return False
        for pid, p in self.s.purchases.items():
            ids = [m for m in p.participating_member_ids if m != member_id]
            self.s.purchases[pid] = replace(p, participating_member_ids=ids)
        return True


class FakeDepositRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.s = store

    def _joined(self, d: Deposit) -> Deposit:
        m = self.s.members.get(d.member_id)
        return replace(
            d,
            member_name=m.name if m else None,
            member_phone=m.phone_number if m else None,
        )

    async def list_deposits(self, db) -> list[Deposit]:
        return [self._joined(d) for d in _newest_first(list(self.s.deposits.values()))]

    async def list_deposits_by_member(self, db, member_id: str) -> list[Deposit]:
        return [d for d in await self.list_deposits(db) if d.member_id == member_id]

    async def get_deposit_by_id(self, db, deposit_id: str) -> Deposit | None:
        d = self.s.deposits.get(deposit_id)
        return self._joined(d) if d else None

    async def count_deposits_for_member(self, db, member_id: str) -> int:
        return sum(1 for d in self.s.deposits.values() if d.member_id == member_id)

    async def insert_deposit(self, db, deposit_id, member_id, amount, date, status, notes) -> Deposit:
        now = self.s.stamp()
        deposit = Deposit(deposit_id, member_id, amount, date, status, notes, now, now)
        self.s.deposits[deposit_id] = deposit
        return self._joined(deposit)

    async def update_deposit(self, db, deposit_id: str, changes: DepositChanges) -> Deposit | None:
        current = self.s.deposits.get(deposit_id)
        if current is None:
            return None
        fields = {k: v for k, v in vars(changes).items() if v is not None}
        updated = replace(current, **fields, updated_at=self.s.stamp())
        self.s.deposits[deposit_id] = updated
        return self._joined(updated)

    async def delete_deposit(self, db, deposit_id: str) -> bool:
        return self.s.deposits.pop(deposit_id, None) is not None


class FakeCowPurchaseRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.s = store

    async def list_cow_purchases(self, db) -> list[CowPurchase]:
        return _newest_first(list(self.s.purchases.values()))

    async def get_cow_purchase_by_id(self, db, purchase_id: str) -> CowPurchase | None:
        return self.s.purchases.get(purchase_id)

    async def insert_cow_purchase(
        self, db, purchase_id, date, amount, participating_member_ids, notes, receipt_image
    ) -> CowPurchase:
        now = self.s.stamp()
        purchase = CowPurchase(
            purchase_id, date, amount, list(participating_member_ids), notes, receipt_image, now, now
        )
        self.s.purchases[purchase_id] = purchase
        return purchase

    async def update_cow_purchase(
        self, db, purchase_id: str, changes: CowPurchaseChanges
    ) -> CowPurchase | None:
        current = self.s.purchases.get(purchase_id)
        if current is None:
            return None
        fields = {k: v for k, v in vars(changes).items() if v is not None}
        updated = replace(current, **fields, updated_at=self.s.stamp())
        self.s.purchases[purchase_id] = updated
        return updated

    async def delete_cow_purchase(self, db, purchase_id: str) -> bool:
        return self.s.purchases.pop(purchase_id, None) is not None


class FakeReceiptStorage:
    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self._n = count(1)

    async def save(self, upload: UploadFile) -> str:
        path = f"/uploads/cow_purchase_test{next(self._n)}.jpg"
        self.files[path] = await upload.read()
        return path

    async def delete(self, path: str) -> bool:
        self.deleted.append(path)
        return self.files.pop(path, None) is not None


class FakeBackend:
    def __init__(self) -> None:
        self.store = InMemoryStore()
        self.members = FakeMemberRepository(self.store)
        self.deposits = FakeDepositRepository(self.store)
        self.purchases = FakeCowPurchaseRepository(self.store)
        self.receipts = FakeReceiptStorage()
        self.session = AsyncMock()


@pytest.fixture
def api(monkeypatch: pytest.MonkeyPatch):
    """Route every router through in-memory repositories."""
    backend = FakeBackend()
    monkeypatch.setattr(
        member_api,
        "_service",
        MemberApplicationService(repo=backend.members, deposit_repo=backend.deposits),
    )
    monkeypatch.setattr(
        deposit_api,
        "_service",
        DepositApplicationService(repo=backend.deposits, member_repo=backend.members),
    )
    monkeypatch.setattr(
        cow_purchase_api,
        "_service",
        CowPurchaseApplicationService(
            repo=backend.purchases, member_repo=backend.members, storage=backend.receipts
        ),
    )

    async def _session():
        yield backend.session

    app.dependency_overrides[get_db_session] = _session
    yield backend
    app.dependency_overrides.pop(get_db_session, None)

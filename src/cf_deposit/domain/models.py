"""Domain models for cf_deposit — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Deposit:
    id: str
    member_id: str                   # immutable after creation
    amount: Decimal                  # taka, >= 1, two decimal places
    date: datetime
    status: str                      # DepositStatus value
    notes: str
    created_at: datetime
    updated_at: datetime
    # Resolved from members at read time; None if the member no longer resolves.
    member_name: str | None = None
    member_phone: str | None = None


@dataclass
class DepositChanges:
    """Partial update — None means "leave as is". The member cannot change."""

    amount: Decimal | None = None
    date: datetime | None = None
    status: str | None = None
    notes: str | None = None

"""Domain models for cf_cow_purchase — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class CowPurchase:
    id: str
    date: datetime
    amount: Decimal                  # taka, >= 1, two decimal places
    participating_member_ids: list[str]  # ordered, no duplicates
    notes: str
    receipt_image: str | None        # public relative path, e.g. /uploads/cow_purchase_1.jpg
    created_at: datetime
    updated_at: datetime


@dataclass
class CowPurchaseChanges:
    """Partial update — None means "leave as is"."""

    amount: Decimal | None = None
    date: datetime | None = None
    notes: str | None = None
    receipt_image: str | None = None
    participating_member_ids: list[str] | None = None

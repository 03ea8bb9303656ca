"""Domain models for cf_member — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Member:
    id: str
    name: str
    phone_number: str
    is_active: bool
    join_date: datetime
    created_at: datetime
    updated_at: datetime


@dataclass
class MemberChanges:
    """Partial update — None means "leave as is"."""

    name: str | None = None
    phone_number: str | None = None
    is_active: bool | None = None
    join_date: datetime | None = None

"""Pydantic schemas for cf_member API."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, StringConstraints

from src.cf_common.money import AmountOut, amount_to_display
from src.cf_member.domain.models import Member

NonEmptyText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class MemberCreateRequest(BaseModel):
    name: NonEmptyText
    phone_number: NonEmptyText
    is_active: bool = True
    join_date: datetime | None = None  # None -> creation time


class MemberUpdateRequest(BaseModel):
    name: NonEmptyText | None = None
    phone_number: NonEmptyText | None = None
    is_active: bool | None = None
    join_date: datetime | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class MemberResponse(BaseModel):
    id: str
    name: str
    phone_number: str
    is_active: bool
    join_date: str
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, m: Member) -> "MemberResponse":
        return cls(
            id=m.id,
            name=m.name,
            phone_number=m.phone_number,
            is_active=m.is_active,
            join_date=m.join_date.isoformat(),
            created_at=m.created_at.isoformat(),
            updated_at=m.updated_at.isoformat(),
        )


class MemberWithDepositsResponse(MemberResponse):
    total_deposit: AmountOut
    total_deposit_display: str

    @classmethod
    def from_total(cls, m: Member, total: Decimal) -> "MemberWithDepositsResponse":
        base = MemberResponse.from_domain(m)
        return cls(
            **base.model_dump(),
            total_deposit=total,
            total_deposit_display=amount_to_display(total),
        )

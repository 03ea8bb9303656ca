"""Pydantic schemas for cf_deposit API."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from src.cf_common.enums import DepositStatus
from src.cf_common.money import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    MAX_AMOUNT,
    MIN_AMOUNT,
    AmountOut,
    amount_to_display,
)
from src.cf_deposit.domain.models import Deposit
from src.cf_summary.domain.models import DepositSummary

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class DepositCreateRequest(BaseModel):
    member_id: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    amount: Decimal = Field(
        ...,
        ge=MIN_AMOUNT,
        le=MAX_AMOUNT,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Taka, up to two decimal places",
    )
    date: datetime | None = None  # None -> creation time
    status: DepositStatus = DepositStatus.APPROVED
    notes: str = Field("", max_length=2000)


class DepositUpdateRequest(BaseModel):
    """member_id is not accepted here; extra keys are ignored."""

    amount: Decimal | None = Field(
        None,
        ge=MIN_AMOUNT,
        le=MAX_AMOUNT,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )
    date: datetime | None = None
    status: DepositStatus | None = None
    notes: str | None = Field(None, max_length=2000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class DepositResponse(BaseModel):
    id: str
    member_id: str
    member_name: str | None
    member_phone: str | None
    amount: AmountOut
    amount_display: str
    date: str
    status: str
    notes: str
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, d: Deposit) -> "DepositResponse":
        return cls(
            id=d.id,
            member_id=d.member_id,
            member_name=d.member_name,
            member_phone=d.member_phone,
            amount=d.amount,
            amount_display=amount_to_display(d.amount),
            date=d.date.isoformat(),
            status=d.status,
            notes=d.notes,
            created_at=d.created_at.isoformat(),
            updated_at=d.updated_at.isoformat(),
        )


class DepositSummaryResponse(BaseModel):
    total_deposit: AmountOut
    total_deposit_display: str
    members_with_deposits: int
    total_members: int
    latest_deposits: list[DepositResponse]

    @classmethod
    def from_summary(cls, s: DepositSummary) -> "DepositSummaryResponse":
        return cls(
            total_deposit=s.total_deposit,
            total_deposit_display=amount_to_display(s.total_deposit),
            members_with_deposits=s.members_with_deposits,
            total_members=s.total_members,
            latest_deposits=[DepositResponse.from_domain(d) for d in s.latest_deposits],
        )

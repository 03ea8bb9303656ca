"""Pydantic schemas for cf_cow_purchase API.

Requests arrive as multipart forms; the router collects the form fields into a
dict and validates it through these models (see parse_model).
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from src.cf_common.money import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    MAX_AMOUNT,
    MIN_AMOUNT,
    AmountOut,
    amount_to_display,
)
from src.cf_cow_purchase.domain.models import CowPurchase
from src.cf_summary.domain.models import CowPurchaseSummary, Participant


def clean_member_ids(raw: list[str]) -> list[str]:
    """Strip, drop blanks, split comma-joined values and de-duplicate in order."""
    seen: dict[str, None] = {}
    for value in raw:
        for part in value.split(","):
            part = part.strip()
            if part:
                seen.setdefault(part, None)
    return list(seen)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CowPurchaseCreateRequest(BaseModel):
    amount: Decimal = Field(
        ...,
        ge=MIN_AMOUNT,
        le=MAX_AMOUNT,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Taka, up to two decimal places",
    )
    date: datetime | None = None
    participating_members: list[str]
    notes: str = Field("", max_length=2000)

    @field_validator("participating_members")
    @classmethod
    def _participants_not_empty(cls, v: list[str]) -> list[str]:
        ids = clean_member_ids(v)
        if not ids:
            raise ValueError("At least one participating member is required")
        return ids


class CowPurchaseUpdateRequest(BaseModel):
    amount: Decimal | None = Field(
        None,
        ge=MIN_AMOUNT,
        le=MAX_AMOUNT,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )
    date: datetime | None = None
    participating_members: list[str] | None = None
    notes: str | None = Field(None, max_length=2000)

    @field_validator("participating_members")
    @classmethod
    def _participants_not_empty(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None
        ids = clean_member_ids(v)
        if not ids:
            raise ValueError("At least one participating member is required")
        return ids


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ParticipantOut(BaseModel):
    id: str
    name: str
    phone_number: str

    @classmethod
    def from_domain(cls, p: Participant) -> "ParticipantOut":
        return cls(id=p.id, name=p.name, phone_number=p.phone_number)


class CowPurchaseResponse(BaseModel):
    id: str
    date: str
    amount: AmountOut
    amount_display: str
    participating_member_ids: list[str]
    participating_members: list[ParticipantOut]
    notes: str
    receipt_image: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(
        cls, p: CowPurchase, participants: list[Participant]
    ) -> "CowPurchaseResponse":
        return cls(
            id=p.id,
            date=p.date.isoformat(),
            amount=p.amount,
            amount_display=amount_to_display(p.amount),
            participating_member_ids=list(p.participating_member_ids),
            participating_members=[ParticipantOut.from_domain(x) for x in participants],
            notes=p.notes,
            receipt_image=p.receipt_image,
            created_at=p.created_at.isoformat(),
            updated_at=p.updated_at.isoformat(),
        )


class CowPurchaseSummaryResponse(BaseModel):
    total_cow_purchases: int
    total_amount_spent: AmountOut
    total_amount_spent_display: str
    latest_cow_purchase: CowPurchaseResponse | None

    @classmethod
    def from_summary(cls, s: CowPurchaseSummary) -> "CowPurchaseSummaryResponse":
        latest = (
            CowPurchaseResponse.from_domain(s.latest_cow_purchase, s.latest_participants)
            if s.latest_cow_purchase
            else None
        )
        return cls(
            total_cow_purchases=s.total_cow_purchases,
            total_amount_spent=s.total_amount_spent,
            total_amount_spent_display=amount_to_display(s.total_amount_spent),
            latest_cow_purchase=latest,
        )

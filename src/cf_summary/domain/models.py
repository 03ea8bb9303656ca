"""Summary snapshots produced by the aggregation functions."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.cf_cow_purchase.domain.models import CowPurchase
from src.cf_deposit.domain.models import Deposit
from src.cf_member.domain.models import Member


@dataclass(frozen=True)
class Participant:
    id: str
    name: str
    phone_number: str


@dataclass(frozen=True)
class DepositSummary:
    total_deposit: Decimal           # approved deposits only
    members_with_deposits: int       # distinct members over all statuses
    total_members: int
    latest_deposits: list[Deposit] = field(default_factory=list)


@dataclass(frozen=True)
class CowPurchaseSummary:
    total_cow_purchases: int
    total_amount_spent: Decimal
    latest_cow_purchase: CowPurchase | None = None
    latest_participants: list[Participant] = field(default_factory=list)


@dataclass(frozen=True)
class MemberTotal:
    member: Member
    total_deposit: Decimal           # all statuses

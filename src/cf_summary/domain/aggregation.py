"""Aggregation engine: derived fund totals as pure folds over current records.

Nothing here touches the store or mutates its inputs. Callers read the
records they need and pass them in; every call produces a fresh snapshot.
Two snapshots computed by separate requests are not transactionally linked.

Status filtering differs per figure, and the differences are kept on purpose
for compatibility with existing reports:

  total_deposit          approved deposits only
  members_with_deposits  distinct members over ALL deposits
  per-member total       ALL deposits of that member
"""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from decimal import Decimal
from typing import TypeVar

from src.cf_common.enums import DepositStatus
from src.cf_common.money import ZERO
from src.cf_cow_purchase.domain.models import CowPurchase
from src.cf_deposit.domain.models import Deposit
from src.cf_member.domain.models import Member
from src.cf_summary.domain.models import (
    CowPurchaseSummary,
    DepositSummary,
    MemberTotal,
    Participant,
)

LATEST_DEPOSITS_LIMIT = 5

_R = TypeVar("_R", Deposit, CowPurchase)


def _newest_first(records: Iterable[_R]) -> list[_R]:
    """Sort by date descending; equal dates keep insertion order.

    Python's sort is stable under reverse=True, so pre-sorting by insertion
    order is enough to break ties.
    """
    by_insertion = sorted(records, key=lambda r: (r.created_at, r.id))
    return sorted(by_insertion, key=lambda r: r.date, reverse=True)


def summarize_deposits(deposits: Sequence[Deposit], members: Sequence[Member]) -> DepositSummary:
    names = {m.id: m for m in members}

    total = sum(
        (d.amount for d in deposits if d.status == DepositStatus.APPROVED.value), ZERO
    )
    distinct_members = len({d.member_id for d in deposits})

    latest = []
    for d in _newest_first(deposits)[:LATEST_DEPOSITS_LIMIT]:
        member = names.get(d.member_id)
        latest.append(
            replace(
                d,
                member_name=member.name if member else None,
                member_phone=member.phone_number if member else None,
            )
        )

    return DepositSummary(
        total_deposit=total,
        members_with_deposits=distinct_members,
        total_members=len(members),
        latest_deposits=latest,
    )


def summarize_cow_purchases(
    purchases: Sequence[CowPurchase], members: Sequence[Member]
) -> CowPurchaseSummary:
    ordered = _newest_first(purchases)
    latest = ordered[0] if ordered else None
    return CowPurchaseSummary(
        total_cow_purchases=len(purchases),
        total_amount_spent=sum((p.amount for p in purchases), ZERO),
        latest_cow_purchase=latest,
        latest_participants=(
            resolve_participants(latest.participating_member_ids, members) if latest else []
        ),
    )


def member_deposit_totals(
    members: Sequence[Member], deposits: Sequence[Deposit]
) -> list[MemberTotal]:
    """Per-member running totals, in the order ``members`` is given."""
    totals: dict[str, Decimal] = {}
    for d in deposits:
        totals[d.member_id] = totals.get(d.member_id, ZERO) + d.amount
    return [MemberTotal(member=m, total_deposit=totals.get(m.id, ZERO)) for m in members]


def resolve_participants(
    member_ids: Iterable[str], members: Iterable[Member]
) -> list[Participant]:
    """Resolve participant ids to names, preserving order; unknown ids are dropped."""
    by_id = {m.id: m for m in members}
    return [
        Participant(id=m.id, name=m.name, phone_number=m.phone_number)
        for m in (by_id.get(mid) for mid in member_ids)
        if m is not None
    ]

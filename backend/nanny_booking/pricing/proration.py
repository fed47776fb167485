"""Mid-cycle proration for service changes on an active long-term booking.

The engine only proposes numbers. A modification request is stored as
``pending_admin_review`` and an external reviewer moves it to ``applied`` or
``rejected``; nothing here touches the booking itself.
"""

from __future__ import annotations

import calendar
import enum
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from . import rates
from .errors import InvalidTransition

PRORATION_DAYS = Decimal("30")


class ModificationType(str, enum.Enum):
    SERVICE_ADDITION = "service_addition"
    SERVICE_REMOVAL = "service_removal"
    CANCELLATION = "cancellation"


class ModificationStatus(str, enum.Enum):
    PENDING_ADMIN_REVIEW = "pending_admin_review"
    APPLIED = "applied"
    REJECTED = "rejected"


_TERMINAL = frozenset({ModificationStatus.APPLIED, ModificationStatus.REJECTED})


def next_status(current: ModificationStatus, decision: ModificationStatus) -> ModificationStatus:
    """Validate a review decision; only pending requests may be decided."""
    if current in _TERMINAL:
        raise InvalidTransition(f"modification already {current.value}")
    if decision not in _TERMINAL:
        raise InvalidTransition(f"{decision.value} is not a review decision")
    return decision


@dataclass(frozen=True)
class ProrationResult:
    modification_type: ModificationType
    services: tuple[str, ...]
    monthly_change: Decimal
    days_remaining: int
    prorated_adjustment: Decimal
    full_adjustment: Decimal
    next_billing_cycle_total: Decimal
    ongoing_monthly_total: Decimal


def days_remaining_in_month(today: date) -> int:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return last_day - today.day


def compute_proration(
    current_total: Any,
    services: Iterable[str],
    modification_type: ModificationType,
    today: date,
) -> ProrationResult:
    """Prorate adding or removing ``services`` from a booking billed ``current_total``.

    ``prorated_adjustment`` covers the rest of the current calendar month on a
    30-day basis; ``full_adjustment`` is the change to every later month.
    Unknown service keys raise ``ValueError``.
    """
    keys = tuple(dict.fromkeys(services))
    current = rates.money(current_total)
    if modification_type is ModificationType.CANCELLATION:
        keys = ()

    monthly = Decimal("0")
    for key in keys:
        try:
            monthly += rates.long_term_service_rate(key)
        except KeyError:
            raise ValueError(f"unknown service {key!r}") from None

    sign = Decimal("-1") if modification_type is ModificationType.SERVICE_REMOVAL else Decimal("1")
    remaining = days_remaining_in_month(today)
    prorated = rates.money(sign * monthly * Decimal(remaining) / PRORATION_DAYS)
    full = rates.money(sign * monthly)

    return ProrationResult(
        modification_type=modification_type,
        services=keys,
        monthly_change=rates.money(monthly),
        days_remaining=remaining,
        prorated_adjustment=prorated,
        full_adjustment=full,
        next_billing_cycle_total=current + prorated,
        ongoing_monthly_total=current + full,
    )

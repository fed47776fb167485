"""Three-way split of a client charge into platform revenue and nanny earnings.

Long-term bookings are commissioned on the monthly *base rate* only (add-on
services flow entirely to the nanny) at a tier chosen by that base rate;
the placement fee is platform revenue on top. Short-term bookings pay a flat
commission on everything except the flat service fee, which is platform
revenue in full.

For every breakdown ``nanny_earnings + admin_total_revenue == client_charge``.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from . import rates
from .errors import PricingDataError
from .types import BookingType, DurationType, HomeSize, PricingResult, RevenueBreakdown

logger = logging.getLogger(__name__)

_HUNDRED = Decimal("100")


def allocate(
    total: Any,
    mode: DurationType,
    base_rate: Any,
    fixed_fee: Any = 0,
    currency: str = "ZAR",
) -> RevenueBreakdown:
    """Split ``total`` for a booking in ``mode``.

    ``total`` is the recurring monthly total for long-term bookings (the
    placement fee ``fixed_fee`` is charged on top of it) and the full client
    charge, flat service fee included, for short-term bookings.
    """
    total_d = rates.money(total)
    base = rates.money(base_rate)
    fixed = rates.money(fixed_fee)
    percent = rates.commission_percent(mode, base)
    commission = rates.money(base * percent / _HUNDRED)
    admin_total = fixed + commission

    if mode is DurationType.LONG_TERM:
        client_charge = total_d + fixed
        nanny = total_d - commission
    else:
        client_charge = total_d
        nanny = total_d - fixed - commission

    return RevenueBreakdown(
        booking_mode=mode,
        client_charge=client_charge,
        fixed_fee=fixed,
        commission_percent=percent,
        commission_amount=commission,
        admin_total_revenue=admin_total,
        nanny_earnings=nanny,
        currency=currency,
    )


def allocate_pricing_result(result: PricingResult, currency: str = "ZAR") -> Optional[RevenueBreakdown]:
    """Derive the split for a priced booking; ``None`` for invalid results."""
    if not result.is_valid:
        return None
    if result.duration_type is DurationType.LONG_TERM:
        return allocate(result.total, DurationType.LONG_TERM, result.base_rate, result.placement_fee or 0, currency)
    fee = result.service_fee or Decimal("0")
    return allocate(result.total, DurationType.SHORT_TERM, result.total - fee, fee, currency)


def calculate_booking_revenue(
    booking_id: Any,
    client_total: Any,
    booking_type: Any,
    living_arrangement: Any = None,
    home_size: Any = None,
    additional_services_cost: Any = 0,
    currency: str = "ZAR",
) -> RevenueBreakdown:
    """Authoritative revenue split for a persisted booking.

    Deterministic in its inputs, so recomputing for the same booking yields
    the same breakdown. Raises :class:`PricingDataError` when the booking is
    missing data its mode requires.
    """
    kind = BookingType.parse(booking_type)
    if kind is None:
        raise PricingDataError(f"booking {booking_id}: unknown booking type {booking_type!r}")

    total = rates.money(client_total)
    if kind is BookingType.LONG_TERM:
        size = HomeSize.parse(home_size)
        if size is None:
            raise PricingDataError(f"booking {booking_id}: long-term booking without a home size")
        base = total - rates.money(additional_services_cost)
        fixed = rates.placement_fee(size, base)
        breakdown = allocate(total, DurationType.LONG_TERM, base, fixed, currency)
    else:
        fixed = rates.short_term_service_fee(kind)
        breakdown = allocate(total, DurationType.SHORT_TERM, total - fixed, fixed, currency)

    logger.info(
        "Revenue calculated for booking %s (%s, %s): admin=%s nanny=%s",
        booking_id,
        kind.value,
        living_arrangement,
        breakdown.admin_total_revenue,
        breakdown.nanny_earnings,
    )
    return breakdown

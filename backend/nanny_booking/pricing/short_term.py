"""Hourly and daily pricing for bounded-duration (short-term) bookings.

Hourly bookings (emergency, date night, date day, school holiday) are priced
authoritatively by the remote hourly pricing function; the local calculation
in :func:`build_hourly_quote` uses the same rate constants and is only used as
a fallback, in which case the result is flagged ``estimated``. Daily "gap
coverage" bookings (``temporary_support``) are always priced locally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional

from . import rates
from .errors import HourlyPricingUnavailable
from .types import (
    BookingType,
    DurationType,
    HomeSize,
    PricingContext,
    PricingResult,
    ServiceFee,
    ServiceSelection,
)

logger = logging.getLogger(__name__)

FALLBACK_WARNING = "Using fallback calculation (estimated pricing)"

HourlyFetcher = Callable[[dict], Awaitable[Mapping[str, Any]]]


@dataclass
class ServiceCharge:
    name: str
    hourly_rate: Decimal
    total_cost: Decimal


@dataclass
class HourlyQuote:
    """Response shape of the authoritative hourly pricing function."""

    booking_type: BookingType
    total_hours: Decimal
    billed_hours: Decimal
    base_hourly_rate: Decimal
    services: list[ServiceCharge]
    subtotal: Decimal
    service_fee: Decimal
    total: Decimal
    effective_hourly_rate: Decimal
    emergency_surcharge: Optional[Decimal] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def base_total(self) -> Decimal:
        return rates.money(self.base_hourly_rate * self.billed_hours)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "baseHourlyRate": float(self.base_hourly_rate),
            "services": [
                {"name": s.name, "hourlyRate": float(s.hourly_rate), "totalCost": float(s.total_cost)}
                for s in self.services
            ],
            "subtotal": float(self.subtotal),
            "serviceFee": float(self.service_fee),
            "total": float(self.total),
            "effectiveHourlyRate": float(self.effective_hourly_rate),
        }
        if self.emergency_surcharge:
            payload["emergencySurcharge"] = float(self.emergency_surcharge)
        return payload

    @classmethod
    def from_payload(
        cls, payload: Mapping[str, Any], booking_type: BookingType, total_hours: Decimal
    ) -> "HourlyQuote":
        """Parse a remote response; raises ``HourlyPricingUnavailable`` when malformed."""
        try:
            services = [
                ServiceCharge(
                    name=str(item["name"]),
                    hourly_rate=rates.money(item.get("hourlyRate")),
                    total_cost=rates.money(item.get("totalCost")),
                )
                for item in (payload.get("services") or [])
            ]
            total = _required_amount(payload, "total")
            base_hourly = _required_amount(payload, "baseHourlyRate")
        except (KeyError, TypeError, AttributeError, ValueError, InvalidOperation) as exc:
            raise HourlyPricingUnavailable(f"malformed hourly pricing response: {exc}") from exc
        surcharge = payload.get("emergencySurcharge")
        return cls(
            booking_type=booking_type,
            total_hours=total_hours,
            billed_hours=_billed_hours(booking_type, total_hours),
            base_hourly_rate=rates.money(base_hourly),
            services=services,
            subtotal=rates.money(payload.get("subtotal")),
            service_fee=rates.money(payload.get("serviceFee")),
            total=rates.money(total),
            effective_hourly_rate=rates.money(payload.get("effectiveHourlyRate")),
            emergency_surcharge=rates.money(surcharge) if surcharge else None,
        )


def _required_amount(payload: Mapping[str, Any], key: str) -> Decimal:
    value = payload[key]
    if value is None or isinstance(value, bool):
        raise ValueError(f"{key} is not a number")
    amount = Decimal(str(value))
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"{key} is not a valid amount")
    return amount


def total_hours(context: PricingContext) -> Decimal:
    """Sum of slot lengths, repeated for every selected date (one day if none)."""
    per_day = sum((slot.hours for slot in context.time_slots), Decimal("0"))
    days = max(1, len(context.selected_dates))
    return per_day * days


def _billed_hours(booking_type: BookingType, hours: Decimal) -> Decimal:
    minimum = rates.MINIMUM_HOURS.get(booking_type, Decimal("0"))
    return min(max(hours, minimum), rates.MAX_BILLABLE_HOURS)


def validate_short_term(selection: ServiceSelection, context: PricingContext) -> tuple[list[str], list[str]]:
    missing: list[str] = []
    warnings: list[str] = []
    booking_type = context.booking_type
    if booking_type is None or not (booking_type.is_hourly or booking_type.is_daily):
        missing.append("bookingType")
    if selection.light_housekeeping and context.home_size is None:
        missing.append("homeSize")
    if not context.selected_dates:
        warnings.append("No dates selected - using default calculation")
    if booking_type is not None and booking_type.is_daily:
        if len(context.selected_dates) < rates.DAILY_MINIMUM_DAYS:
            missing.append("selectedDates")
    elif booking_type is not None and booking_type.is_hourly:
        if total_hours(context) <= 0:
            missing.append("timeSlots")
    return missing, warnings


def build_hourly_quote(
    booking_type: BookingType,
    hours: Decimal,
    selection: ServiceSelection,
    selected_dates: Iterable[date] = (),
    home_size: Optional[HomeSize] = None,
) -> HourlyQuote:
    """Local hourly calculation; the authoritative endpoint serves this too."""
    if not booking_type.is_hourly:
        raise ValueError(f"{booking_type.value} is not an hourly booking type")
    dates = list(selected_dates)
    warnings: list[str] = []
    billed = _billed_hours(booking_type, hours)
    if billed > hours:
        warnings.append(f"Minimum of {billed.normalize()} hours applies to {booking_type.value} bookings")
    elif billed < hours:
        warnings.append(f"Hours capped at {rates.MAX_BILLABLE_HOURS}")

    base_hourly = rates.hourly_base_rate(booking_type, dates)
    days = max(1, len(dates))
    services: list[ServiceCharge] = []
    hourly_surcharge = Decimal("0")
    flat_total = Decimal("0")

    if selection.cooking:
        cost = rates.COOKING_DAILY_FEE * days
        services.append(ServiceCharge("Cooking/Food-prep (daily)", rates.COOKING_DAILY_FEE, cost))
        flat_total += cost

    for key, (label, per_hour) in rates.HOURLY_SERVICE_SURCHARGES.items():
        if getattr(selection, key):
            services.append(ServiceCharge(label, per_hour, rates.money(per_hour * billed)))
            hourly_surcharge += per_hour

    if selection.light_housekeeping and home_size is not None:
        per_day = rates.LIGHT_HOUSEKEEPING_DAILY[home_size]
        cost = per_day * days
        services.append(ServiceCharge(f"Light Housekeeping ({home_size.label})", per_day, cost))
        flat_total += cost

    effective = base_hourly + hourly_surcharge
    subtotal = effective * billed + flat_total
    service_fee = rates.HOURLY_SERVICE_FEE
    return HourlyQuote(
        booking_type=booking_type,
        total_hours=hours,
        billed_hours=billed,
        base_hourly_rate=rates.money(base_hourly),
        services=[ServiceCharge(s.name, rates.money(s.hourly_rate), rates.money(s.total_cost)) for s in services],
        subtotal=rates.money(subtotal),
        service_fee=rates.money(service_fee),
        total=rates.money(subtotal + service_fee),
        effective_hourly_rate=rates.money(effective),
        warnings=warnings,
    )


def _daily_pricing(selection: ServiceSelection, context: PricingContext, warnings: list[str]) -> PricingResult:
    dates = list(context.selected_dates)
    base = sum((rates.daily_rate(d) for d in dates), Decimal("0"))
    days = len(dates)
    fees: list[ServiceFee] = []
    if selection.cooking:
        fees.append(ServiceFee("Cooking/Food-prep (daily)", rates.money(rates.COOKING_DAILY_FEE * days)))
    if selection.light_housekeeping and context.home_size is not None:
        per_day = rates.LIGHT_HOUSEKEEPING_DAILY[context.home_size]
        fees.append(ServiceFee(f"Light Housekeeping ({context.home_size.label})", rates.money(per_day * days)))
    if selection.special_needs:
        fees.append(ServiceFee("Diverse Ability Support", rates.money(0)))
    service_fee = rates.DAILY_SERVICE_FEE
    total = base + sum((f.amount for f in fees), Decimal("0")) + service_fee
    return PricingResult(
        base_rate=rates.money(base),
        service_fees=fees,
        total=rates.money(total),
        label="/total",
        duration_type=DurationType.SHORT_TERM,
        service_fee=rates.money(service_fee),
        warnings=warnings or None,
        total_days=days,
    )


def _result_from_quote(quote: HourlyQuote, days: int, warnings: list[str], estimated: bool) -> PricingResult:
    return PricingResult(
        base_rate=quote.base_total,
        service_fees=[ServiceFee(s.name, s.total_cost) for s in quote.services],
        total=quote.total,
        label="/total",
        duration_type=DurationType.SHORT_TERM,
        service_fee=quote.service_fee,
        warnings=(warnings + quote.warnings) or None,
        estimated=estimated,
        total_hours=quote.total_hours,
        total_days=days,
    )


def compute_short_term_pricing_local(selection: ServiceSelection, context: PricingContext) -> PricingResult:
    """Price a short-term booking with the local rate tables only."""
    missing, warnings = validate_short_term(selection, context)
    if missing:
        logger.info("Short-term pricing rejected; missing %s", missing)
        return PricingResult.invalid(DurationType.SHORT_TERM, missing, warnings)
    if context.booking_type.is_daily:
        return _daily_pricing(selection, context, warnings)
    quote = build_hourly_quote(
        context.booking_type,
        total_hours(context),
        selection,
        context.selected_dates,
        context.home_size,
    )
    return _result_from_quote(quote, len(context.selected_dates), warnings, estimated=False)


def hourly_request_payload(selection: ServiceSelection, context: PricingContext) -> dict[str, Any]:
    return {
        "bookingType": context.booking_type.value if context.booking_type else None,
        "totalHours": float(total_hours(context)),
        "services": {
            "cooking": selection.cooking,
            "specialNeeds": selection.special_needs,
            "drivingSupport": selection.driving_support,
            "lightHousekeeping": selection.light_housekeeping,
            "petCare": selection.pet_care,
        },
        "selectedDates": [d.isoformat() for d in context.selected_dates],
        "homeSize": context.home_size.value if (context.home_size and selection.light_housekeeping) else None,
    }


async def compute_short_term_pricing(
    selection: ServiceSelection,
    context: PricingContext,
    fetch: Optional[HourlyFetcher] = None,
) -> PricingResult:
    """Price a short-term booking, preferring the remote hourly function.

    Any remote failure is recovered by the local calculation; the result is
    then marked ``estimated`` and carries :data:`FALLBACK_WARNING`.
    """
    missing, warnings = validate_short_term(selection, context)
    if missing:
        logger.info("Short-term pricing rejected; missing %s", missing)
        return PricingResult.invalid(DurationType.SHORT_TERM, missing, warnings)
    if context.booking_type.is_daily:
        return _daily_pricing(selection, context, warnings)

    if fetch is None:
        from ..services.hourly_pricing_client import fetch_hourly_quote as fetch

    hours = total_hours(context)
    days = len(context.selected_dates)
    try:
        payload = await fetch(hourly_request_payload(selection, context))
        quote = HourlyQuote.from_payload(payload, context.booking_type, hours)
    except HourlyPricingUnavailable as exc:
        logger.warning("Hourly pricing unavailable, using local estimate: %s", exc)
        local = build_hourly_quote(context.booking_type, hours, selection, context.selected_dates, context.home_size)
        return _result_from_quote(local, days, warnings + [FALLBACK_WARNING], estimated=True)
    return _result_from_quote(quote, days, warnings, estimated=False)

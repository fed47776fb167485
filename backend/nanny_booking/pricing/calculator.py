"""Single entry point that prices a raw preference payload in either mode."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .long_term import compute_long_term_pricing
from .revenue import allocate_pricing_result
from .service_mapping import map_services
from .short_term import HourlyFetcher, compute_short_term_pricing
from .types import BookingType, DurationType, PricingContext, PricingResult

logger = logging.getLogger(__name__)

INVALID_PREFERENCES = "Invalid preferences provided"


def _first(prefs: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = prefs.get(key)
        if value is not None:
            return value
    return None


def context_from_preferences(prefs: Mapping[str, Any]) -> PricingContext:
    """Build a :class:`PricingContext` from camelCase (or snake_case) preferences."""
    booking_type = BookingType.parse(_first(prefs, "bookingSubType", "bookingType", "booking_sub_type", "booking_type"))
    duration = DurationType.parse(_first(prefs, "durationType", "duration_type"))
    if duration is None:
        duration = DurationType.LONG_TERM if booking_type is BookingType.LONG_TERM else DurationType.SHORT_TERM
    if duration is DurationType.LONG_TERM:
        booking_type = BookingType.LONG_TERM
    elif booking_type is BookingType.LONG_TERM:
        booking_type = None

    return PricingContext.build(
        duration_type=duration,
        booking_type=booking_type,
        home_size=_first(prefs, "homeSize", "home_size"),
        living_arrangement=_first(prefs, "livingArrangement", "living_arrangement"),
        children_ages=_first(prefs, "childrenAges", "children_ages"),
        other_dependents=_first(prefs, "otherDependents", "other_dependents") or 0,
        selected_dates=_first(prefs, "selectedDates", "selected_dates"),
        time_slots=_first(prefs, "timeSlots", "time_slots"),
    )


class UnifiedPricingCalculator:
    """Dispatch raw preferences to the long-term or short-term engine.

    ``fetch`` overrides the remote hourly pricing call (mainly for tests).
    """

    def __init__(self, fetch: Optional[HourlyFetcher] = None, currency: str = "ZAR") -> None:
        self.fetch = fetch
        self.currency = currency

    async def calculate_pricing(self, preferences: Any) -> PricingResult:
        if not isinstance(preferences, Mapping):
            logger.info("Pricing requested with non-mapping preferences: %s", type(preferences).__name__)
            return PricingResult.invalid(DurationType.SHORT_TERM, [INVALID_PREFERENCES])

        context = context_from_preferences(preferences)
        selection = map_services(preferences, context.duration_type)
        if context.duration_type is DurationType.LONG_TERM:
            result = compute_long_term_pricing(selection, context)
        else:
            result = await compute_short_term_pricing(selection, context, fetch=self.fetch)

        if result.is_valid:
            result.revenue = allocate_pricing_result(result, self.currency)
        logger.debug(
            "Priced %s booking",
            context.duration_type.value,
            extra={"valid": result.is_valid, "total": str(result.total), "estimated": result.estimated},
        )
        return result


_calculator: Optional[UnifiedPricingCalculator] = None


def get_pricing_calculator() -> UnifiedPricingCalculator:
    global _calculator
    if _calculator is None:
        _calculator = UnifiedPricingCalculator()
    return _calculator

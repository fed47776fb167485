"""Booking pricing and revenue allocation."""

from .calculator import UnifiedPricingCalculator, get_pricing_calculator
from .errors import HourlyPricingUnavailable, InvalidTransition, PricingDataError, PricingError
from .long_term import compute_long_term_pricing
from .proration import ModificationStatus, ModificationType, ProrationResult, compute_proration
from .revenue import allocate, allocate_pricing_result, calculate_booking_revenue
from .service_mapping import canonical_service_key, map_services
from .short_term import compute_short_term_pricing, compute_short_term_pricing_local
from .types import (
    BookingType,
    DurationType,
    HomeSize,
    LivingArrangement,
    PricingContext,
    PricingResult,
    RevenueBreakdown,
    ServiceFee,
    ServiceSelection,
)

__all__ = [
    "UnifiedPricingCalculator",
    "get_pricing_calculator",
    "PricingError",
    "PricingDataError",
    "HourlyPricingUnavailable",
    "InvalidTransition",
    "compute_long_term_pricing",
    "compute_short_term_pricing",
    "compute_short_term_pricing_local",
    "ModificationStatus",
    "ModificationType",
    "ProrationResult",
    "compute_proration",
    "allocate",
    "allocate_pricing_result",
    "calculate_booking_revenue",
    "canonical_service_key",
    "map_services",
    "BookingType",
    "DurationType",
    "HomeSize",
    "LivingArrangement",
    "PricingContext",
    "PricingResult",
    "RevenueBreakdown",
    "ServiceFee",
    "ServiceSelection",
]

"""Static rate tables.

Read-only for the lifetime of the process. All amounts are ZAR.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Iterable, Optional

from .types import BookingType, DurationType, HomeSize, LivingArrangement

_CENT = Decimal("0.01")
_RAND = Decimal("1")


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return default


def money(value: Any) -> Decimal:
    return to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


# ─── Long-term (monthly) ─────────────────────────────────────────────────────

MONTHLY_BASE_RATES: dict[HomeSize, dict[LivingArrangement, Decimal]] = {
    HomeSize.POCKET_PALACE: {LivingArrangement.LIVE_IN: Decimal("4500"), LivingArrangement.LIVE_OUT: Decimal("4800")},
    HomeSize.FAMILY_HUB: {LivingArrangement.LIVE_IN: Decimal("6000"), LivingArrangement.LIVE_OUT: Decimal("6800")},
    HomeSize.GRAND_ESTATE: {LivingArrangement.LIVE_IN: Decimal("7000"), LivingArrangement.LIVE_OUT: Decimal("7800")},
    HomeSize.MONUMENTAL_MANOR: {LivingArrangement.LIVE_IN: Decimal("8000"), LivingArrangement.LIVE_OUT: Decimal("9000")},
    HomeSize.EPIC_ESTATES: {LivingArrangement.LIVE_IN: Decimal("10000"), LivingArrangement.LIVE_OUT: Decimal("11000")},
}

STANDARD_PLACEMENT_FEE = Decimal("2500")
PREMIUM_PLACEMENT_RATIO = Decimal("0.50")
FLAT_PLACEMENT_TIERS = frozenset({HomeSize.POCKET_PALACE, HomeSize.FAMILY_HUB})

CHILD_SURCHARGE_THRESHOLD = 3
CHILD_SURCHARGE_AMOUNT = Decimal("500")
CHILD_MAX_AGE_YEARS = Decimal("18")
DEPENDENT_SURCHARGE_THRESHOLD = 2
DEPENDENT_SURCHARGE_AMOUNT = Decimal("500")

# (label, monthly amount). Light housekeeping is bundled into the base rate but
# still itemized.
LONG_TERM_SERVICE_FEES: dict[str, tuple[str, Decimal]] = {
    "cooking": ("Cooking", Decimal("1500")),
    "driving_support": ("Driving Support", Decimal("1500")),
    "special_needs": ("Diverse Ability Support", Decimal("1500")),
    "ecd_training": ("ECD Training", Decimal("500")),
    "montessori": ("Montessori", Decimal("800")),
    "backup_nanny": ("Backup Nanny", Decimal("1000")),
    "light_housekeeping": ("Light Housekeeping (included)", Decimal("0")),
}

LOW_COMMISSION_THRESHOLD = Decimal("5000")
HIGH_COMMISSION_THRESHOLD = Decimal("10000")
LOW_COMMISSION_PERCENT = Decimal("10")
STANDARD_COMMISSION_PERCENT = Decimal("15")
PREMIUM_COMMISSION_PERCENT = Decimal("25")

# ─── Short-term (hourly / daily) ─────────────────────────────────────────────

SHORT_TERM_COMMISSION_PERCENT = Decimal("20")

HOURLY_BASE_RATES: dict[BookingType, Decimal] = {
    BookingType.EMERGENCY: Decimal("80"),
    BookingType.DATE_NIGHT: Decimal("120"),
    BookingType.DATE_DAY: Decimal("40"),
    BookingType.SCHOOL_HOLIDAY: Decimal("40"),
}
HOURLY_WEEKEND_RATE = Decimal("55")
WEEKEND_RATED_TYPES = frozenset({BookingType.DATE_DAY, BookingType.SCHOOL_HOLIDAY})

MINIMUM_HOURS: dict[BookingType, Decimal] = {
    BookingType.EMERGENCY: Decimal("5"),
    BookingType.DATE_NIGHT: Decimal("3"),
}
MAX_BILLABLE_HOURS = Decimal("720")

# Per-hour surcharges added to the base hourly rate.
HOURLY_SERVICE_SURCHARGES: dict[str, tuple[str, Decimal]] = {
    "special_needs": ("Diverse Ability Support", Decimal("0")),
    "pet_care": ("Pet-Savvy", Decimal("0")),
    "driving_support": ("Driving Support", Decimal("25")),
}

# Cooking is billed per day in every short-term mode, hourly ones included.
COOKING_DAILY_FEE = Decimal("100")

LIGHT_HOUSEKEEPING_DAILY: dict[HomeSize, Decimal] = {
    HomeSize.POCKET_PALACE: Decimal("80"),
    HomeSize.FAMILY_HUB: Decimal("100"),
    HomeSize.GRAND_ESTATE: Decimal("120"),
    HomeSize.MONUMENTAL_MANOR: Decimal("140"),
    HomeSize.EPIC_ESTATES: Decimal("300"),
}

HOURLY_SERVICE_FEE = Decimal("35")

DAILY_WEEKDAY_RATE = Decimal("280")
DAILY_WEEKEND_RATE = Decimal("350")
DAILY_SERVICE_FEE = Decimal("2500")
DAILY_MINIMUM_DAYS = 5

# date.weekday(): Monday == 0
_HOURLY_WEEKEND_DAYS = frozenset({5, 6})
_DAILY_WEEKEND_DAYS = frozenset({4, 5, 6})


def monthly_base_rate(home_size: HomeSize, arrangement: LivingArrangement) -> Decimal:
    return MONTHLY_BASE_RATES[home_size][arrangement]


def placement_fee(home_size: HomeSize, base_rate: Decimal) -> Decimal:
    """Flat fee for the two smallest tiers, half the base rate (whole rand) above."""
    if home_size in FLAT_PLACEMENT_TIERS:
        return STANDARD_PLACEMENT_FEE
    return (to_decimal(base_rate) * PREMIUM_PLACEMENT_RATIO).quantize(_RAND, rounding=ROUND_HALF_UP)


def long_term_commission_percent(base_rate: Decimal) -> Decimal:
    base = to_decimal(base_rate)
    if base <= LOW_COMMISSION_THRESHOLD:
        return LOW_COMMISSION_PERCENT
    if base >= HIGH_COMMISSION_THRESHOLD:
        return PREMIUM_COMMISSION_PERCENT
    return STANDARD_COMMISSION_PERCENT


def commission_percent(mode: DurationType, base_rate: Decimal) -> Decimal:
    if mode is DurationType.LONG_TERM:
        return long_term_commission_percent(base_rate)
    return SHORT_TERM_COMMISSION_PERCENT


def short_term_service_fee(booking_type: Optional[BookingType]) -> Decimal:
    if booking_type is BookingType.TEMPORARY_SUPPORT:
        return DAILY_SERVICE_FEE
    return HOURLY_SERVICE_FEE


def long_term_service_rate(service: str) -> Decimal:
    """Monthly rate of a single add-on; raises ``KeyError`` for unknown services."""
    return LONG_TERM_SERVICE_FEES[service][1]


def is_hourly_weekend(day: date) -> bool:
    return day.weekday() in _HOURLY_WEEKEND_DAYS


def is_daily_weekend(day: date) -> bool:
    return day.weekday() in _DAILY_WEEKEND_DAYS


def hourly_base_rate(booking_type: BookingType, selected_dates: Iterable[date] = ()) -> Decimal:
    rate = HOURLY_BASE_RATES[booking_type]
    if booking_type in WEEKEND_RATED_TYPES and any(is_hourly_weekend(d) for d in selected_dates):
        return HOURLY_WEEKEND_RATE
    return rate


def daily_rate(day: date) -> Decimal:
    return DAILY_WEEKEND_RATE if is_daily_weekend(day) else DAILY_WEEKDAY_RATE

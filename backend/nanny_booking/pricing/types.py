"""Value types shared by the pricing engines.

Everything here is immutable. Raw client payloads are converted into these
types once (see :mod:`.service_mapping` and :mod:`.calculator`) so the engines
never look at loosely-typed preference blobs.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any, Iterable, Optional

from ..core.config import settings


class DurationType(str, enum.Enum):
    LONG_TERM = "long_term"
    SHORT_TERM = "short_term"

    @classmethod
    def parse(cls, value: Any) -> Optional["DurationType"]:
        if isinstance(value, cls):
            return value
        key = _slug(value)
        for member in cls:
            if member.value == key:
                return member
        return None


class BookingType(str, enum.Enum):
    EMERGENCY = "emergency"
    DATE_NIGHT = "date_night"
    DATE_DAY = "date_day"
    SCHOOL_HOLIDAY = "school_holiday"
    TEMPORARY_SUPPORT = "temporary_support"
    LONG_TERM = "long_term"

    @classmethod
    def parse(cls, value: Any) -> Optional["BookingType"]:
        if isinstance(value, cls):
            return value
        key = _slug(value)
        if key in ("day_care", "daycare"):
            return cls.DATE_DAY
        if key == "gap_coverage":
            return cls.TEMPORARY_SUPPORT
        for member in cls:
            if member.value == key:
                return member
        return None

    @property
    def is_hourly(self) -> bool:
        return self in HOURLY_BOOKING_TYPES

    @property
    def is_daily(self) -> bool:
        return self is BookingType.TEMPORARY_SUPPORT


HOURLY_BOOKING_TYPES = frozenset(
    {
        BookingType.EMERGENCY,
        BookingType.DATE_NIGHT,
        BookingType.DATE_DAY,
        BookingType.SCHOOL_HOLIDAY,
    }
)


class HomeSize(str, enum.Enum):
    """Home-size tiers, declared smallest first."""

    POCKET_PALACE = "pocket_palace"
    FAMILY_HUB = "family_hub"
    GRAND_ESTATE = "grand_estate"
    MONUMENTAL_MANOR = "monumental_manor"
    EPIC_ESTATES = "epic_estates"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, value: Any) -> Optional["HomeSize"]:
        if isinstance(value, cls):
            return value
        key = _slug(value)
        if not key:
            return None
        for member in cls:
            if member.value == key:
                return member
        aliases = {
            "small": cls.POCKET_PALACE,
            "medium": cls.FAMILY_HUB,
            "large": cls.GRAND_ESTATE,
            "extra_large": cls.MONUMENTAL_MANOR,
            "grand_retreat": cls.GRAND_ESTATE,
        }
        if key in aliases:
            return aliases[key]
        if "pocket" in key:
            return cls.POCKET_PALACE
        if "family" in key:
            return cls.FAMILY_HUB
        if "monumental" in key:
            return cls.MONUMENTAL_MANOR
        if "epic" in key:
            return cls.EPIC_ESTATES
        if "grand" in key:
            return cls.GRAND_ESTATE
        return None


class LivingArrangement(str, enum.Enum):
    LIVE_IN = "live_in"
    LIVE_OUT = "live_out"

    @classmethod
    def parse(cls, value: Any) -> Optional["LivingArrangement"]:
        if isinstance(value, cls):
            return value
        key = _slug(value)
        if key in ("live_in", "livein"):
            return cls.LIVE_IN
        if key in ("live_out", "liveout"):
            return cls.LIVE_OUT
        return None


def _slug(value: Any) -> str:
    if value is None:
        return ""
    return re.sub(r"[\s\-]+", "_", str(value).strip().lower())


@dataclass(frozen=True)
class ServiceSelection:
    """Normalized add-on flags, identical in shape for both booking modes."""

    cooking: bool = False
    special_needs: bool = False
    driving_support: bool = False
    pet_care: bool = False
    ecd_training: bool = False
    montessori: bool = False
    backup_nanny: bool = False
    light_housekeeping: bool = False
    errand_runs: bool = False

    def selected(self) -> list[str]:
        return [name for name in SERVICE_KEYS if getattr(self, name)]

    def as_dict(self) -> dict[str, bool]:
        return {name: bool(getattr(self, name)) for name in SERVICE_KEYS}


SERVICE_KEYS: tuple[str, ...] = (
    "cooking",
    "special_needs",
    "driving_support",
    "pet_care",
    "ecd_training",
    "montessori",
    "backup_nanny",
    "light_housekeeping",
    "errand_runs",
)


@dataclass(frozen=True)
class TimeSlot:
    start: time
    end: time

    @property
    def hours(self) -> Decimal:
        """Length of the slot in hours; slots that do not move forward are empty."""
        start_min = self.start.hour * 60 + self.start.minute
        end_min = self.end.hour * 60 + self.end.minute
        if end_min <= start_min:
            return Decimal("0")
        return Decimal(end_min - start_min) / Decimal("60")

    @classmethod
    def parse(cls, raw: Any) -> Optional["TimeSlot"]:
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, dict):
            start, end = raw.get("start"), raw.get("end")
        else:
            start, end = getattr(raw, "start", None), getattr(raw, "end", None)
        start_t, end_t = parse_time(start), parse_time(end)
        if start_t is None or end_t is None:
            return None
        return cls(start=start_t, end=end_t)


def parse_time(value: Any) -> Optional[time]:
    if isinstance(value, time):
        return value
    if not value:
        return None
    try:
        return time.fromisoformat(str(value).strip())
    except ValueError:
        return None


def local_timezone() -> timezone:
    return timezone(timedelta(hours=settings.PRICING_UTC_OFFSET_HOURS))


def parse_date(value: Any, tz: Optional[timezone] = None) -> Optional[date]:
    """Accept dates, datetimes and ISO strings (``2025-11-20`` or full timestamps).

    Timestamps carrying an offset are moved into ``tz`` (the configured local
    zone by default) before the calendar date is taken.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(tz or local_timezone()).date()
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    try:
        if len(text) > 10:
            return parse_date(datetime.fromisoformat(text.replace("Z", "+00:00")), tz)
        return date.fromisoformat(text)
    except ValueError:
        return None


def _as_items(value: Any) -> tuple:
    """Loose list field: sequences pass through, a lone value is one item."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(value)
    return (value,)


@dataclass(frozen=True)
class PricingContext:
    """Explicit booking configuration handed to the engines.

    Only ``duration_type`` has a default that affects pricing. ``home_size`` and
    ``living_arrangement`` stay ``None`` when absent so the long-term engine can
    reject them instead of guessing.
    """

    duration_type: DurationType = DurationType.SHORT_TERM
    booking_type: Optional[BookingType] = None
    home_size: Optional[HomeSize] = None
    living_arrangement: Optional[LivingArrangement] = None
    children_ages: tuple[str, ...] = ()
    other_dependents: int = 0
    selected_dates: tuple[date, ...] = ()
    time_slots: tuple[TimeSlot, ...] = ()

    def __post_init__(self) -> None:
        if self.other_dependents < 0:
            raise ValueError("other_dependents must be non-negative")

    @classmethod
    def build(
        cls,
        *,
        duration_type: Any = None,
        booking_type: Any = None,
        home_size: Any = None,
        living_arrangement: Any = None,
        children_ages: Optional[Iterable[Any]] = None,
        other_dependents: Any = 0,
        selected_dates: Optional[Iterable[Any]] = None,
        time_slots: Optional[Iterable[Any]] = None,
    ) -> "PricingContext":
        """Build a context from loosely-typed values, dropping unparseable entries."""
        try:
            dependents = max(0, int(other_dependents or 0))
        except (TypeError, ValueError):
            dependents = 0
        dates = tuple(d for d in (parse_date(v) for v in _as_items(selected_dates)) if d is not None)
        slots = tuple(s for s in (TimeSlot.parse(v) for v in _as_items(time_slots)) if s is not None)
        return cls(
            duration_type=DurationType.parse(duration_type) or DurationType.SHORT_TERM,
            booking_type=BookingType.parse(booking_type),
            home_size=HomeSize.parse(home_size),
            living_arrangement=LivingArrangement.parse(living_arrangement),
            children_ages=tuple(str(a) for a in _as_items(children_ages) if a is not None),
            other_dependents=dependents,
            selected_dates=dates,
            time_slots=slots,
        )


@dataclass(frozen=True)
class ServiceFee:
    name: str
    amount: Decimal


@dataclass
class PricingResult:
    base_rate: Decimal
    service_fees: list[ServiceFee]
    total: Decimal
    label: str
    duration_type: DurationType
    is_valid: bool = True
    placement_fee: Optional[Decimal] = None
    service_fee: Optional[Decimal] = None
    errors: Optional[list[str]] = None
    warnings: Optional[list[str]] = None
    estimated: bool = False
    total_hours: Optional[Decimal] = None
    total_days: Optional[int] = None
    revenue: Optional["RevenueBreakdown"] = None

    @property
    def additional_services_cost(self) -> Decimal:
        return sum((fee.amount for fee in self.service_fees), Decimal("0"))

    @classmethod
    def invalid(
        cls,
        duration_type: DurationType,
        errors: list[str],
        warnings: Optional[list[str]] = None,
    ) -> "PricingResult":
        return cls(
            base_rate=Decimal("0"),
            service_fees=[],
            total=Decimal("0"),
            label="/month" if duration_type is DurationType.LONG_TERM else "/total",
            duration_type=duration_type,
            is_valid=False,
            errors=list(errors),
            warnings=list(warnings) if warnings else None,
        )


@dataclass(frozen=True)
class RevenueBreakdown:
    booking_mode: DurationType
    client_charge: Decimal
    fixed_fee: Decimal
    commission_percent: Decimal
    commission_amount: Decimal
    admin_total_revenue: Decimal
    nanny_earnings: Decimal
    currency: str = "ZAR"

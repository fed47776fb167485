import asyncio
from datetime import date
from decimal import Decimal

import pytest

from nanny_booking.pricing import DurationType, HourlyPricingUnavailable, UnifiedPricingCalculator
from nanny_booking.pricing.calculator import INVALID_PREFERENCES, context_from_preferences
from nanny_booking.pricing.types import BookingType, parse_date


async def _down(payload):
    raise HourlyPricingUnavailable("down")


def _price(prefs):
    return asyncio.run(UnifiedPricingCalculator(fetch=_down).calculate_pricing(prefs))


@pytest.mark.parametrize("prefs", [None, "long_term", [1, 2], 42])
def test_non_mapping_preferences_are_rejected(prefs):
    result = _price(prefs)
    assert not result.is_valid
    assert result.errors == [INVALID_PREFERENCES]


def test_long_term_preferences_attach_revenue():
    result = _price(
        {
            "durationType": "long_term",
            "homeSize": "family_hub",
            "livingArrangement": "live_out",
            "cooking": True,
        }
    )
    assert result.total == Decimal("8300")
    assert result.placement_fee == Decimal("2500")
    assert result.revenue.admin_total_revenue == Decimal("3520")
    assert result.revenue.nanny_earnings == Decimal("7280")


def test_short_term_preferences_fall_back_when_remote_down():
    result = _price(
        {
            "durationType": "short_term",
            "bookingSubType": "emergency",
            "selectedDates": ["2025-11-20T00:00:00.000Z"],
            "timeSlots": [{"start": "08:00", "end": "14:00"}],
            "cooking": True,
        }
    )
    assert result.total == Decimal("615")
    assert result.estimated
    assert result.revenue.client_charge == Decimal("615")
    assert result.revenue.fixed_fee == Decimal("35")


def test_invalid_result_has_no_revenue():
    result = _price({"durationType": "long_term", "livingArrangement": "live_in"})
    assert result.errors == ["homeSize"]
    assert result.revenue is None


def test_duration_inferred_from_booking_type():
    ctx = context_from_preferences({"bookingType": "long_term", "homeSize": "Grand Estate"})
    assert ctx.duration_type is DurationType.LONG_TERM
    assert ctx.booking_type is BookingType.LONG_TERM

    ctx = context_from_preferences({"bookingType": "day_care"})
    assert ctx.duration_type is DurationType.SHORT_TERM
    assert ctx.booking_type is BookingType.DATE_DAY


@pytest.mark.parametrize("field", ["timeSlots", "selectedDates", "childrenAges"])
def test_scalar_list_fields_do_not_raise(field):
    prefs = {"bookingType": "emergency", "selectedDates": ["2025-11-20"], "timeSlots": [{"start": "08:00", "end": "14:00"}]}
    prefs[field] = 6
    result = _price(prefs)
    assert isinstance(result.errors, list)


def test_scalar_time_slots_report_missing_slots():
    result = _price({"bookingType": "emergency", "selectedDates": ["2025-11-20"], "timeSlots": 6})
    assert not result.is_valid
    assert result.errors == ["timeSlots"]


def test_children_ages_string_is_one_child():
    ctx = context_from_preferences({"durationType": "long_term", "childrenAges": "12 years"})
    assert ctx.children_ages == ("12 years",)

    ctx = context_from_preferences({"durationType": "long_term", "childrenAges": 3})
    assert ctx.children_ages == ("3",)


def test_timestamp_dates_follow_configured_offset(monkeypatch):
    from nanny_booking.core.config import settings

    stamp = "2025-11-20T22:30:00.000Z"
    assert parse_date(stamp) == date(2025, 11, 21)
    monkeypatch.setattr(settings, "PRICING_UTC_OFFSET_HOURS", 0.0)
    assert parse_date(stamp) == date(2025, 11, 20)
    assert parse_date("2025-11-20") == date(2025, 11, 20)
    assert parse_date("not a date") is None

from decimal import Decimal

import pytest

from nanny_booking.pricing import (
    HomeSize,
    LivingArrangement,
    PricingContext,
    PricingDataError,
    ServiceSelection,
    compute_long_term_pricing,
)
from nanny_booking.pricing import rates
from nanny_booking.pricing.long_term import count_children, dependent_surcharges, parse_age_years, price_long_term


def _ctx(size, arrangement, **kw):
    return PricingContext.build(duration_type="long_term", home_size=size, living_arrangement=arrangement, **kw)


def test_family_hub_live_out_with_cooking():
    result = compute_long_term_pricing(ServiceSelection(cooking=True), _ctx("family_hub", "live_out"))
    assert result.is_valid
    assert result.base_rate == Decimal("6800")
    assert result.total == Decimal("8300")
    assert result.placement_fee == Decimal("2500")
    assert result.label == "/month"
    assert [(f.name, f.amount) for f in result.service_fees] == [("Cooking", Decimal("1500"))]


def test_epic_estates_live_in_premium_placement():
    result = compute_long_term_pricing(ServiceSelection(), _ctx("epic_estates", "live_in"))
    assert result.total == Decimal("10000")
    assert result.placement_fee == Decimal("5000")


def test_placement_fee_ignores_add_ons():
    ctx = _ctx("grand_estate", "live_out")
    bare = compute_long_term_pricing(ServiceSelection(), ctx)
    loaded = compute_long_term_pricing(
        ServiceSelection(cooking=True, montessori=True, backup_nanny=True, special_needs=True), ctx
    )
    assert bare.placement_fee == loaded.placement_fee == Decimal("3900")
    assert loaded.total == Decimal("7800") + Decimal("1500") + Decimal("800") + Decimal("1000") + Decimal("1500")


def test_light_housekeeping_itemized_at_zero():
    result = compute_long_term_pricing(ServiceSelection(light_housekeeping=True), _ctx("pocket_palace", "live_in"))
    assert result.service_fees[0].name == "Light Housekeeping (included)"
    assert result.service_fees[0].amount == Decimal("0")
    assert result.total == Decimal("4500")


@pytest.mark.parametrize("arrangement", list(LivingArrangement))
def test_base_rate_non_decreasing_in_home_size(arrangement):
    values = [rates.monthly_base_rate(size, arrangement) for size in HomeSize]
    assert values == sorted(values)


def test_missing_configuration_is_reported():
    result = compute_long_term_pricing(ServiceSelection(), PricingContext.build(duration_type="long_term"))
    assert not result.is_valid
    assert result.errors == ["homeSize", "livingArrangement"]
    assert result.total == Decimal("0")


def test_price_long_term_rejects_unvalidated_context():
    with pytest.raises(PricingDataError):
        price_long_term(ServiceSelection(), PricingContext.build(duration_type="long_term", home_size="family_hub"))


def test_surcharge_thresholds():
    assert dependent_surcharges(3, 2) == []
    lines = dependent_surcharges(4, 3)
    assert [line.amount for line in lines] == [Decimal("500"), Decimal("500")]


def test_surcharges_raise_base_rate_and_placement():
    ctx = _ctx(
        "grand_estate",
        "live_out",
        children_ages=["2", "4 years", "18 months", "7", "25"],
        other_dependents=3,
    )
    result = compute_long_term_pricing(ServiceSelection(), ctx)
    assert result.base_rate == Decimal("8800")
    assert result.placement_fee == Decimal("4400")


def test_unreadable_ages_are_ignored_with_warning():
    ctx = _ctx("pocket_palace", "live_in", children_ages=["toddler", "3", "5", "9"])
    result = compute_long_term_pricing(ServiceSelection(), ctx)
    assert result.base_rate == Decimal("4500")
    assert result.warnings == ["Ignored unreadable child ages: toddler"]


def test_parse_age_years():
    assert parse_age_years("4") == Decimal("4")
    assert parse_age_years("18 months") == Decimal("1.5")
    assert parse_age_years("6mo") == Decimal("0.5")
    assert parse_age_years("3 yrs") == Decimal("3")
    assert parse_age_years("baby") is None
    assert count_children(["19", "18", "17"]) == (2, [])

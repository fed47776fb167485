from datetime import date
from decimal import Decimal

import pytest

from nanny_booking.pricing import InvalidTransition, ModificationStatus, ModificationType, compute_proration
from nanny_booking.pricing.proration import days_remaining_in_month, next_status


def test_removal_mid_month():
    result = compute_proration("8300", ["cooking"], ModificationType.SERVICE_REMOVAL, date(2025, 11, 10))
    assert result.days_remaining == 20
    assert result.prorated_adjustment == Decimal("-1000")
    assert result.full_adjustment == Decimal("-1500")
    assert result.next_billing_cycle_total == Decimal("7300")
    assert result.ongoing_monthly_total == Decimal("6800")


def test_addition_rounds_to_cents():
    result = compute_proration("6800", ["montessori"], ModificationType.SERVICE_ADDITION, date(2025, 2, 14))
    assert result.days_remaining == 14
    assert result.prorated_adjustment == Decimal("373.33")
    assert result.full_adjustment == Decimal("800")


def test_multiple_services_are_summed_once():
    result = compute_proration(
        "6800", ["ecd_training", "backup_nanny", "ecd_training"], ModificationType.SERVICE_ADDITION, date(2025, 11, 30)
    )
    assert result.services == ("ecd_training", "backup_nanny")
    assert result.monthly_change == Decimal("1500")
    assert result.prorated_adjustment == Decimal("0")
    assert result.ongoing_monthly_total == Decimal("8300")


def test_cancellation_has_no_adjustment():
    result = compute_proration("8300", ["cooking"], ModificationType.CANCELLATION, date(2025, 11, 10))
    assert result.prorated_adjustment == Decimal("0")
    assert result.full_adjustment == Decimal("0")
    assert result.ongoing_monthly_total == Decimal("8300")


def test_unknown_service_rejected():
    with pytest.raises(ValueError):
        compute_proration("8300", ["yoga"], ModificationType.SERVICE_ADDITION, date(2025, 11, 10))


def test_days_remaining_in_month():
    assert days_remaining_in_month(date(2024, 2, 1)) == 28
    assert days_remaining_in_month(date(2025, 12, 31)) == 0


def test_status_transitions():
    assert next_status(ModificationStatus.PENDING_ADMIN_REVIEW, ModificationStatus.APPLIED) is ModificationStatus.APPLIED
    assert next_status(ModificationStatus.PENDING_ADMIN_REVIEW, ModificationStatus.REJECTED) is ModificationStatus.REJECTED
    with pytest.raises(InvalidTransition):
        next_status(ModificationStatus.APPLIED, ModificationStatus.REJECTED)
    with pytest.raises(InvalidTransition):
        next_status(ModificationStatus.PENDING_ADMIN_REVIEW, ModificationStatus.PENDING_ADMIN_REVIEW)

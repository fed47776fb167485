from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
import logging

from .. import crud, schemas
from ..core.config import settings
from ..crud import crud_booking_financials as fin
from ..database import get_db
from ..pricing import (
    BookingType,
    HomeSize,
    PricingDataError,
    ServiceSelection,
    UnifiedPricingCalculator,
    calculate_booking_revenue,
    get_pricing_calculator,
)
from ..pricing.short_term import build_hourly_quote
from ..utils import error_response, not_found

router = APIRouter(tags=["pricing"])
logger = logging.getLogger(__name__)


@router.post("/pricing/preview", response_model=schemas.PricingResultOut)
async def preview_pricing(
    preferences: Any = Body(...),
    calculator: UnifiedPricingCalculator = Depends(get_pricing_calculator),
):
    """Price raw booking preferences without persisting anything.

    Configuration problems come back as ``isValid: false`` with the missing
    parameter names in ``errors``; the preview itself never fails.
    """
    result = await calculator.calculate_pricing(preferences)
    return schemas.PricingResultOut.model_validate(result, from_attributes=True)


@router.post("/pricing/hourly")
def hourly_pricing(body: schemas.HourlyPricingRequest):
    """Authoritative price for an hourly short-term booking."""
    booking_type = BookingType.parse(body.booking_type)
    if booking_type is None or not booking_type.is_hourly:
        raise error_response(
            "Unsupported booking type for hourly pricing",
            {"bookingType": "invalid"},
        )
    home_size = HomeSize.parse(body.home_size)
    if body.services.light_housekeeping and home_size is None:
        raise error_response(
            "Home size is required for light housekeeping",
            {"homeSize": "required"},
        )
    selection = ServiceSelection(
        cooking=body.services.cooking,
        special_needs=body.services.special_needs,
        driving_support=body.services.driving_support,
        light_housekeeping=body.services.light_housekeeping,
        pet_care=body.services.pet_care,
    )
    quote = build_hourly_quote(booking_type, body.total_hours, selection, body.selected_dates, home_size)
    return quote.to_payload()


@router.post("/bookings/{booking_id}/revenue", response_model=schemas.BookingRevenueOut)
def booking_revenue(
    booking_id: int,
    body: schemas.RevenueRequest,
    db: Session = Depends(get_db),
):
    """Compute and store the revenue split for a booking, at most once."""
    db_booking = crud.booking.get_booking(db, booking_id)
    if not db_booking:
        raise not_found("Booking", "booking_id")
    try:
        breakdown = calculate_booking_revenue(
            booking_id,
            body.client_total,
            body.booking_type,
            body.living_arrangement,
            body.home_size,
            body.additional_services_cost,
            currency=settings.DEFAULT_CURRENCY,
        )
    except PricingDataError as exc:
        raise error_response(str(exc), {"booking": "incomplete"})
    row, _created = fin.create_financials_once(db, booking_id, breakdown)
    return row

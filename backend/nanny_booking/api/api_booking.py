from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session
import logging

from .. import crud, schemas
from ..core.config import settings
from ..crud import crud_booking_financials as fin
from ..database import get_db
from ..pricing import (
    UnifiedPricingCalculator,
    calculate_booking_revenue,
    get_pricing_calculator,
    map_services,
)
from ..pricing.calculator import context_from_preferences
from ..pricing.types import parse_date
from ..utils import error_response, missing_fields, not_found

router = APIRouter(tags=["bookings"])
logger = logging.getLogger(__name__)


def _get_booking_or_404(db: Session, booking_id: int):
    db_booking = crud.booking.get_booking(db, booking_id)
    if not db_booking:
        raise not_found("Booking", "booking_id")
    return db_booking


@router.post(
    "/bookings",
    response_model=schemas.BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    preferences: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    calculator: UnifiedPricingCalculator = Depends(get_pricing_calculator),
):
    """Create a booking from raw preferences.

    The price is always recomputed here; totals sent by the client are
    ignored. The revenue split is stored once the booking row exists.
    """
    result = await calculator.calculate_pricing(preferences)
    if not result.is_valid:
        raise missing_fields("Invalid booking configuration", result.errors or [])

    context = context_from_preferences(preferences)
    selection = map_services(preferences, context.duration_type)
    db_booking = crud.booking.create_booking(
        db,
        context,
        selection,
        result,
        start_date=parse_date(preferences.get("startDate")),
        notes=str(preferences["notes"]) if preferences.get("notes") is not None else None,
    )
    logger.info(
        "Booking %s created (%s, total=%s, estimated=%s)",
        db_booking.id,
        context.booking_type.value,
        result.total,
        result.estimated,
    )

    breakdown = calculate_booking_revenue(
        db_booking.id,
        result.total,
        context.booking_type,
        context.living_arrangement,
        context.home_size,
        result.additional_services_cost,
        currency=settings.DEFAULT_CURRENCY,
    )
    fin.create_financials_once(db, db_booking.id, breakdown)
    db.refresh(db_booking)
    return db_booking


@router.get("/bookings/{booking_id}", response_model=schemas.BookingResponse)
def read_booking(booking_id: int, db: Session = Depends(get_db)):
    return _get_booking_or_404(db, booking_id)


@router.get("/bookings/{booking_id}/revenue", response_model=schemas.BookingRevenueOut)
def read_booking_revenue(booking_id: int, db: Session = Depends(get_db)):
    _get_booking_or_404(db, booking_id)
    row = fin.get_financials(db, booking_id)
    if not row:
        raise error_response(
            "Revenue not recorded for booking",
            {"booking_id": "no_financials"},
            status.HTTP_404_NOT_FOUND,
        )
    return row

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from .. import crud, schemas
from ..crud import crud_booking_modification as mods
from ..database import get_db
from ..pricing import DurationType, InvalidTransition, ModificationType, compute_proration
from ..utils import error_response, not_found

router = APIRouter(tags=["modifications"])
logger = logging.getLogger(__name__)


@router.post(
    "/bookings/{booking_id}/modifications",
    response_model=schemas.ModificationResponse,
    status_code=status.HTTP_201_CREATED,
)
def request_modification(
    booking_id: int,
    body: schemas.ModificationCreate,
    db: Session = Depends(get_db),
):
    """Propose a mid-cycle service change for admin review.

    The prorated charge is computed against today's date; the booking is not
    changed until an admin applies the request elsewhere.
    """
    db_booking = crud.booking.get_booking(db, booking_id)
    if not db_booking:
        raise not_found("Booking", "booking_id")
    if db_booking.duration_type is not DurationType.LONG_TERM:
        raise error_response(
            "Only long-term bookings can be modified mid-cycle",
            {"booking_id": "not_long_term"},
        )

    selected = {k for k, v in (db_booking.services or {}).items() if v}
    field_errors = {}
    for key in body.services:
        if body.modification_type is ModificationType.SERVICE_ADDITION and key in selected:
            field_errors[key] = "already_selected"
        elif body.modification_type is ModificationType.SERVICE_REMOVAL and key not in selected:
            field_errors[key] = "not_selected"
    if body.modification_type is not ModificationType.CANCELLATION and not body.services:
        field_errors["services"] = "required"
    if field_errors:
        raise error_response("Invalid modification request", field_errors)

    today = date.today()
    try:
        proration = compute_proration(
            db_booking.total_monthly_cost,
            body.services,
            body.modification_type,
            today,
        )
    except ValueError as exc:
        raise error_response(str(exc), {"services": "unknown"})

    mod = mods.create_modification(db, db_booking, proration, today, body.notes)
    logger.info(
        "Modification %s requested for booking %s: %s %s",
        mod.id,
        booking_id,
        body.modification_type.value,
        proration.prorated_adjustment,
    )
    return mod


@router.get(
    "/bookings/{booking_id}/modifications",
    response_model=List[schemas.ModificationResponse],
)
def list_modifications(booking_id: int, db: Session = Depends(get_db)):
    return mods.get_modifications_for_booking(db, booking_id)


@router.post("/modifications/{modification_id}/review", response_model=schemas.ModificationResponse)
def review_modification(
    modification_id: int,
    body: schemas.ModificationReview,
    db: Session = Depends(get_db),
):
    mod = mods.get_modification(db, modification_id)
    if not mod:
        raise not_found("Modification", "modification_id")
    try:
        return mods.review_modification(db, mod, body.decision)
    except InvalidTransition as exc:
        raise error_response(str(exc), {"status": mod.status.value}, status.HTTP_409_CONFLICT)

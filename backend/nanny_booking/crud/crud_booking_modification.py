from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from .. import models
from ..pricing.proration import ModificationStatus, ProrationResult, next_status


def get_modification(db: Session, modification_id: int) -> Optional[models.BookingModification]:
    return (
        db.query(models.BookingModification)
        .filter(models.BookingModification.id == modification_id)
        .first()
    )


def get_modifications_for_booking(db: Session, booking_id: int) -> List[models.BookingModification]:
    return (
        db.query(models.BookingModification)
        .filter(models.BookingModification.booking_id == booking_id)
        .order_by(models.BookingModification.id.asc())
        .all()
    )


def create_modification(
    db: Session,
    booking: models.Booking,
    proration: ProrationResult,
    effective_date: date,
    notes: Optional[str] = None,
) -> models.BookingModification:
    """Record a proposed change; the booking itself is left untouched."""
    current = sorted(k for k, v in (booking.services or {}).items() if v)
    mod = models.BookingModification(
        booking_id=booking.id,
        modification_type=proration.modification_type,
        old_values={
            "services": current,
            "total_monthly_cost": str(booking.total_monthly_cost),
        },
        new_values={
            "services": list(proration.services),
            "monthly_change": str(proration.monthly_change),
            "days_remaining": proration.days_remaining,
            "next_billing_cycle_total": str(proration.next_billing_cycle_total),
            "ongoing_monthly_total": str(proration.ongoing_monthly_total),
        },
        price_adjustment=proration.prorated_adjustment,
        full_adjustment=proration.full_adjustment,
        effective_date=effective_date,
        notes=notes,
        status=ModificationStatus.PENDING_ADMIN_REVIEW,
    )
    db.add(mod)
    db.commit()
    db.refresh(mod)
    return mod


def review_modification(
    db: Session, mod: models.BookingModification, decision: ModificationStatus
) -> models.BookingModification:
    """Apply an admin decision. Raises ``InvalidTransition`` if already decided."""
    mod.status = next_status(mod.status, decision)
    mod.reviewed_at = datetime.utcnow()
    db.commit()
    db.refresh(mod)
    return mod

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..pricing.types import RevenueBreakdown

logger = logging.getLogger(__name__)


def get_financials(db: Session, booking_id: int) -> Optional[models.BookingFinancials]:
    return (
        db.query(models.BookingFinancials)
        .filter(models.BookingFinancials.booking_id == booking_id)
        .first()
    )


def create_financials_once(
    db: Session, booking_id: int, breakdown: RevenueBreakdown
) -> Tuple[models.BookingFinancials, bool]:
    """Store the revenue split for ``booking_id`` unless one already exists.

    Returns ``(row, created)``. A second call for the same booking is a caller
    bug: it is logged and the stored row is returned unchanged.
    """
    existing = get_financials(db, booking_id)
    if existing:
        logger.error("Revenue already recorded for booking %s; keeping stored split", booking_id)
        return existing, False

    row = models.BookingFinancials(
        booking_id=booking_id,
        booking_mode=breakdown.booking_mode,
        client_charge=breakdown.client_charge,
        fixed_fee=breakdown.fixed_fee,
        commission_percent=breakdown.commission_percent,
        commission_amount=breakdown.commission_amount,
        admin_total_revenue=breakdown.admin_total_revenue,
        nanny_earnings=breakdown.nanny_earnings,
        currency=breakdown.currency,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert for the same booking.
        db.rollback()
        logger.error("Concurrent revenue insert for booking %s; keeping stored split", booking_id)
        stored = get_financials(db, booking_id)
        if stored is None:
            raise
        return stored, False
    db.refresh(row)
    return row, True

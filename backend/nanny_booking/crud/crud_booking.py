from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from .. import models
from ..models.booking_status import BookingStatus
from ..pricing.types import PricingContext, PricingResult, ServiceSelection


class CRUDBooking:
    def get_booking(self, db: Session, booking_id: int) -> Optional[models.Booking]:
        return db.query(models.Booking).filter(models.Booking.id == booking_id).first()

    def create_booking(
        self,
        db: Session,
        context: PricingContext,
        selection: ServiceSelection,
        result: PricingResult,
        start_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> models.Booking:
        """Persist a booking priced server-side. ``result`` must be valid."""
        dates = sorted(context.selected_dates)
        db_booking = models.Booking(
            booking_type=context.booking_type,
            duration_type=context.duration_type,
            home_size=context.home_size,
            living_arrangement=context.living_arrangement,
            services=selection.as_dict(),
            start_date=start_date or (dates[0] if dates else None),
            end_date=dates[-1] if dates else None,
            base_rate=result.base_rate,
            additional_services_cost=result.additional_services_cost,
            total_monthly_cost=result.total,
            placement_fee=result.placement_fee,
            estimated=result.estimated,
            status=BookingStatus.PENDING,
            notes=notes,
        )
        db.add(db_booking)
        db.commit()
        db.refresh(db_booking)
        return db_booking


booking = CRUDBooking()

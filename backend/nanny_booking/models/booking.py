# backend/nanny_booking/models/booking.py

from sqlalchemy import Boolean, Column, Date, Numeric, String, JSON
from sqlalchemy.orm import relationship

from .base import BaseModel
from .booking_status import BookingStatus
from .types import CaseInsensitiveEnum
from ..pricing.types import BookingType, DurationType, HomeSize, LivingArrangement

class Booking(BaseModel):
    __tablename__ = "bookings"

    booking_type       = Column(CaseInsensitiveEnum(BookingType, name="bookingtype"), nullable=False, index=True)
    duration_type      = Column(CaseInsensitiveEnum(DurationType, name="durationtype"), nullable=False)
    home_size          = Column(CaseInsensitiveEnum(HomeSize, name="homesize"), nullable=True)
    living_arrangement = Column(CaseInsensitiveEnum(LivingArrangement, name="livingarrangement"), nullable=True)
    # normalized service flags, e.g. {"cooking": true, ...}
    services           = Column(JSON, nullable=False, default=dict)
    start_date         = Column(Date, nullable=True)
    end_date           = Column(Date, nullable=True)
    base_rate          = Column(Numeric(10, 2), nullable=False)
    additional_services_cost = Column(Numeric(10, 2), nullable=False, default=0)
    # monthly total for long-term, full client charge for short-term
    total_monthly_cost = Column(Numeric(10, 2), nullable=False)
    placement_fee      = Column(Numeric(10, 2), nullable=True)
    estimated          = Column(Boolean, nullable=False, default=False)
    status             = Column(
        CaseInsensitiveEnum(BookingStatus, name="bookingstatus"),
        default=BookingStatus.PENDING,
        index=True,
    )
    notes              = Column(String, nullable=True)

    financials    = relationship("BookingFinancials", back_populates="booking", uselist=False)
    modifications = relationship(
        "BookingModification",
        back_populates="booking",
        order_by="BookingModification.id",
    )

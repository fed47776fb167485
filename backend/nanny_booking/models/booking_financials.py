from sqlalchemy import Column, Integer, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import BaseModel
from .types import CaseInsensitiveEnum
from ..pricing.types import DurationType


class BookingFinancials(BaseModel):
    """Stored revenue split of a booking. At most one row per booking."""

    __tablename__ = "booking_financials"
    __table_args__ = (UniqueConstraint("booking_id", name="uq_booking_financials_booking_id"),)

    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    booking_mode = Column(CaseInsensitiveEnum(DurationType, name="durationtype"), nullable=False)
    client_charge = Column(Numeric(10, 2), nullable=False)
    fixed_fee = Column(Numeric(10, 2), nullable=False)
    commission_percent = Column(Numeric(5, 2), nullable=False)
    commission_amount = Column(Numeric(10, 2), nullable=False)
    admin_total_revenue = Column(Numeric(10, 2), nullable=False)
    nanny_earnings = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="ZAR")

    booking = relationship("Booking", back_populates="financials")

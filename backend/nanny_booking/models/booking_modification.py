from sqlalchemy import Column, Integer, ForeignKey, Date, DateTime, Numeric, String, JSON
from sqlalchemy.orm import relationship

from .base import BaseModel
from .types import CaseInsensitiveEnum
from ..pricing.proration import ModificationStatus, ModificationType


class BookingModification(BaseModel):
    """A proposed mid-cycle change awaiting admin review."""

    __tablename__ = "booking_modifications"

    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    modification_type = Column(CaseInsensitiveEnum(ModificationType, name="modificationtype"), nullable=False)
    old_values = Column(JSON, nullable=False, default=dict)
    new_values = Column(JSON, nullable=False, default=dict)
    price_adjustment = Column(Numeric(10, 2), nullable=False)
    full_adjustment = Column(Numeric(10, 2), nullable=False)
    effective_date = Column(Date, nullable=False)
    notes = Column(String, nullable=True)
    status = Column(
        CaseInsensitiveEnum(ModificationStatus, name="modificationstatus"),
        nullable=False,
        default=ModificationStatus.PENDING_ADMIN_REVIEW,
        index=True,
    )
    reviewed_at = Column(DateTime, nullable=True)

    booking = relationship("Booking", back_populates="modifications")

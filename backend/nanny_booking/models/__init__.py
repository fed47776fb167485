from .booking import Booking
from .booking_status import BookingStatus
from .booking_financials import BookingFinancials
from .booking_modification import BookingModification

__all__ = [
    "Booking",
    "BookingStatus",
    "BookingFinancials",
    "BookingModification",
]

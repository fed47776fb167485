from .crud_booking import booking
from . import crud_booking_financials
from . import crud_booking_modification

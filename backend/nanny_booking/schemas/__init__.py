from .pricing import (
    BookingRevenueOut,
    HourlyPricingRequest,
    HourlyServices,
    PricingResultOut,
    RevenueOut,
    RevenueRequest,
    ServiceFeeOut,
)
from .booking import BookingResponse
from .modification import ModificationCreate, ModificationResponse, ModificationReview

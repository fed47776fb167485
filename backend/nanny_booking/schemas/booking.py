from pydantic import BaseModel
from typing import Any, Dict, Optional
from datetime import date, datetime
from decimal import Decimal

from ..models.booking_status import BookingStatus
from ..pricing.types import BookingType, DurationType, HomeSize, LivingArrangement
from .pricing import CAMEL, RevenueOut


# Properties to return to client
class BookingResponse(BaseModel):
    id: int
    booking_type: BookingType
    duration_type: DurationType
    home_size: Optional[HomeSize] = None
    living_arrangement: Optional[LivingArrangement] = None
    services: Dict[str, Any]
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    base_rate: Decimal
    additional_services_cost: Decimal
    total_monthly_cost: Decimal
    placement_fee: Optional[Decimal] = None
    estimated: bool = False
    status: BookingStatus
    notes: Optional[str] = None
    created_at: datetime
    financials: Optional[RevenueOut] = None

    model_config = {**CAMEL, "from_attributes": True}

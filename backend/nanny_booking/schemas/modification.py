from pydantic import BaseModel, field_validator
from typing import Any, Dict, List, Optional
from datetime import date, datetime
from decimal import Decimal

from ..pricing.proration import ModificationStatus, ModificationType
from ..pricing.service_mapping import canonical_service_key
from .pricing import CAMEL


class ModificationCreate(BaseModel):
    modification_type: ModificationType
    services: List[str] = []
    notes: Optional[str] = None

    model_config = CAMEL

    @field_validator("services")
    def normalize_services(cls, v: List[str]) -> List[str]:
        return [canonical_service_key(s) for s in v]


class ModificationReview(BaseModel):
    decision: ModificationStatus

    @field_validator("decision")
    def must_be_decision(cls, v: ModificationStatus) -> ModificationStatus:
        if v is ModificationStatus.PENDING_ADMIN_REVIEW:
            raise ValueError("decision must be applied or rejected")
        return v


class ModificationResponse(BaseModel):
    id: int
    booking_id: int
    modification_type: ModificationType
    old_values: Dict[str, Any]
    new_values: Dict[str, Any]
    price_adjustment: Decimal
    full_adjustment: Decimal
    effective_date: date
    notes: Optional[str] = None
    status: ModificationStatus
    reviewed_at: Optional[datetime] = None
    created_at: datetime

    model_config = {**CAMEL, "from_attributes": True}

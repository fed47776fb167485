from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ..pricing.types import DurationType

# Wire format is camelCase; field names stay snake_case in Python.
CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class ServiceFeeOut(BaseModel):
    name: str
    amount: Decimal

    model_config = {**CAMEL, "from_attributes": True}


class RevenueOut(BaseModel):
    booking_mode: DurationType
    client_charge: Decimal
    fixed_fee: Decimal
    commission_percent: Decimal
    commission_amount: Decimal
    admin_total_revenue: Decimal
    nanny_earnings: Decimal
    currency: str = "ZAR"

    model_config = {**CAMEL, "from_attributes": True}


class PricingResultOut(BaseModel):
    base_rate: Decimal
    service_fees: List[ServiceFeeOut] = []
    additional_services_cost: Decimal
    total: Decimal
    label: str
    duration_type: DurationType
    is_valid: bool
    placement_fee: Optional[Decimal] = None
    service_fee: Optional[Decimal] = None
    errors: Optional[List[str]] = None
    warnings: Optional[List[str]] = None
    estimated: bool = False
    total_hours: Optional[Decimal] = None
    total_days: Optional[int] = None
    revenue: Optional[RevenueOut] = None

    model_config = {**CAMEL, "from_attributes": True}


class HourlyServices(BaseModel):
    cooking: bool = False
    special_needs: bool = False
    driving_support: bool = False
    light_housekeeping: bool = False
    pet_care: bool = False

    model_config = CAMEL


class HourlyPricingRequest(BaseModel):
    booking_type: str
    total_hours: Decimal = Field(ge=0)
    services: HourlyServices = HourlyServices()
    selected_dates: List[date] = []
    home_size: Optional[str] = None

    model_config = CAMEL


class RevenueRequest(BaseModel):
    client_total: Decimal = Field(ge=0)
    booking_type: str
    living_arrangement: Optional[str] = None
    home_size: Optional[str] = None
    additional_services_cost: Decimal = Field(default=Decimal("0"), ge=0)

    model_config = CAMEL


class BookingRevenueOut(RevenueOut):
    booking_id: int

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriceEstimateRequest(CamelModel):
    pickup_place_id: Optional[str] = None
    dropoff_place_id: Optional[str] = None
    # Dates and counts stay loosely typed; the validator reports bad values
    pickup_date_time: Optional[Any] = None
    vehicle_type: Optional[str] = None
    passengers: Optional[Any] = None
    luggage: Optional[Any] = None
    round_trip: Optional[bool] = False
    return_date_time: Optional[Any] = None


class PriceBreakdown(CamelModel):
    base_fare: float
    distance_charge: float
    actual_distance_km: float
    chargeable_distance_km: float
    price_per_km: float
    round_trip: bool
    vehicle_type: str


class PriceDetails(CamelModel):
    distance_in_km: float
    chargeable_distance_in_km: float
    duration_in_minutes: int
    formatted_distance: str
    formatted_duration: str


class PriceEstimate(CamelModel):
    exact_price: float
    min_price: float
    max_price: float
    currency: str = "EUR"
    breakdown: PriceBreakdown
    details: PriceDetails


class ValidationResult(BaseModel):
    valid: bool
    errors: List[str] = []


class EstimateResult(BaseModel):
    success: bool
    data: Optional[dict] = None
    errors: List[str] = []

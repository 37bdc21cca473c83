from typing import Any, Optional
from pydantic import BaseModel

from chauffeur_pricing.schemas.estimate import CamelModel


class CustomerInfo(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class BookingRequest(CamelModel):
    pickup_address: Optional[str] = None
    dropoff_address: Optional[str] = None
    pickup_date: Optional[str] = None
    pickup_time: Optional[str] = None
    passengers: Optional[Any] = None
    luggage: Optional[Any] = None
    vehicle_type: Optional[str] = None
    customer_info: Optional[CustomerInfo] = None
    round_trip: Optional[bool] = False
    return_date: Optional[str] = None
    return_time: Optional[str] = None
    price_estimate: Optional[dict] = None

from typing import Optional
from pydantic import BaseModel, Field

from chauffeur_pricing.schemas.estimate import CamelModel


class RouteDetails(BaseModel):
    distance_meters: int = Field(ge=0)
    distance_text: str
    duration_seconds: int = Field(ge=0)
    duration_text: str
    origin_address: str
    destination_address: str


class PlaceDetails(BaseModel):
    place_id: str
    formatted_address: str
    name: str
    lat: float
    lng: float


class RouteDetailsRequest(CamelModel):
    origin_place_id: Optional[str] = None
    destination_place_id: Optional[str] = None


class PlaceDetailsRequest(CamelModel):
    place_id: Optional[str] = None

from typing import Literal, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"

    GOOGLE_MAPS_API_KEY: Optional[str] = None
    DISTANCE_MATRIX_URL: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    PLACE_DETAILS_URL: str = "https://maps.googleapis.com/maps/api/place/details/json"
    MAPS_LANGUAGE: str = "fr"

    # Unset picks direct in development, proxy elsewhere
    ROUTE_LOOKUP_MODE: Optional[Literal["direct", "proxy"]] = None
    ROUTE_PROXY_URL: str = "http://localhost:8000/maps/route-details"
    ROUTE_LOOKUP_TIMEOUT: float = 5.0  # seconds

    API_TITLE: str = "Chauffeur Pricing Service"
    API_DESCRIPTION: str = "Trip price estimates for chauffeur bookings"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

    @field_validator("ROUTE_LOOKUP_MODE", mode="before")
    @classmethod
    def normalize_route_lookup_mode(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            return value or None
        return value

    @property
    def route_lookup_mode(self) -> str:
        if self.ROUTE_LOOKUP_MODE:
            return self.ROUTE_LOOKUP_MODE
        return "direct" if self.ENVIRONMENT == "development" else "proxy"

settings = Settings()

from typing import Any, List

from chauffeur_pricing.core.enums import ResponseProjection
from chauffeur_pricing.schemas.estimate import PriceEstimate
from chauffeur_pricing.schemas.route import PlaceDetails, RouteDetails

INVALID_DATA_ERROR = "Données invalides"
PRICE_CALCULATION_ERROR = "Erreur lors du calcul du prix"


def project_estimate(estimate: PriceEstimate, projection: ResponseProjection) -> dict:
    payload = estimate.model_dump(by_alias=True)
    if projection == ResponseProjection.ESTIMATE:
        return {"estimate": payload}
    return payload


def build_success_response(data: Any) -> dict:
    return {"success": True, "data": data}


def build_validation_error_response(errors: List[str]) -> dict:
    return {"success": False, "error": INVALID_DATA_ERROR, "details": list(errors)}


def build_server_error_response(error: str, exc: Exception) -> dict:
    return {"success": False, "error": error, "message": str(exc)}


def build_route_details_payload(route: RouteDetails) -> dict:
    return {
        "distance": {"text": route.distance_text, "value": route.distance_meters},
        "duration": {"text": route.duration_text, "value": route.duration_seconds},
        "origin": route.origin_address,
        "destination": route.destination_address,
    }


def build_place_details_payload(place: PlaceDetails) -> dict:
    return {
        "formatted_address": place.formatted_address,
        "name": place.name,
        "geometry": {"location": {"lat": place.lat, "lng": place.lng}},
    }

"""Server-side proxies for the Google Maps lookups used by the booking form"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from chauffeur_pricing.api.deps import get_direct_route_client
from chauffeur_pricing.core.response_builders import (
    build_place_details_payload,
    build_route_details_payload,
    build_success_response,
)
from chauffeur_pricing.schemas.route import PlaceDetailsRequest, RouteDetailsRequest
from chauffeur_pricing.services.routing import RouteLookupClient

router = APIRouter(prefix="/maps", tags=["maps"])


@router.post("/route-details")
async def route_details(
    payload: RouteDetailsRequest,
    client: RouteLookupClient = Depends(get_direct_route_client),
):
    if not payload.origin_place_id or not payload.destination_place_id:
        return JSONResponse(status_code=400, content={"success": False, "error": "IDs de lieux requis"})

    route = await client.get_route_details(payload.origin_place_id, payload.destination_place_id)
    return build_success_response(build_route_details_payload(route))


@router.post("/place-details")
async def place_details(
    payload: PlaceDetailsRequest,
    client: RouteLookupClient = Depends(get_direct_route_client),
):
    if not payload.place_id:
        return JSONResponse(status_code=400, content={"success": False, "error": "ID de lieu requis"})

    place = await client.get_place_details(payload.place_id)
    return build_success_response(build_place_details_payload(place))

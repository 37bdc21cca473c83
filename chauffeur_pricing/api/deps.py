from fastapi import Depends

from chauffeur_pricing.services.estimates import EstimateHandler
from chauffeur_pricing.services.routing import DIRECT, RouteLookupClient


def get_route_client() -> RouteLookupClient:
    return RouteLookupClient.from_settings()


def get_direct_route_client() -> RouteLookupClient:
    # The proxy endpoints themselves must always talk to Google
    return RouteLookupClient.from_settings(mode=DIRECT)


def get_estimate_handler(route_client: RouteLookupClient = Depends(get_route_client)) -> EstimateHandler:
    return EstimateHandler(route_client)

import logging
from datetime import datetime
from typing import Optional

from chauffeur_pricing.core.enums import ResponseProjection
from chauffeur_pricing.core.metrics import estimate_rejections, price_estimates
from chauffeur_pricing.core.response_builders import project_estimate
from chauffeur_pricing.schemas.estimate import EstimateResult, PriceEstimateRequest
from chauffeur_pricing.services.pricing import DEFAULT_VEHICLE_TYPE, calculate_price
from chauffeur_pricing.services.routing import RouteLookupClient
from chauffeur_pricing.services.validator import validate_price_request

logger = logging.getLogger(__name__)


class EstimateHandler:
    """Validate, look up the route, price it.

    Invalid requests stop before any network call. The route lookup cannot
    fail (it falls back on its own), so a valid request always yields an
    estimate.
    """

    def __init__(self, route_client: RouteLookupClient):
        self.route_client = route_client

    async def estimate(
        self,
        request: PriceEstimateRequest,
        projection: ResponseProjection = ResponseProjection.FULL,
        now: Optional[datetime] = None,
    ) -> EstimateResult:
        validation = validate_price_request(request, now=now)
        if not validation.valid:
            estimate_rejections.inc()
            logger.info(f"Price estimate rejected: {'; '.join(validation.errors)}")
            return EstimateResult(success=False, errors=validation.errors)

        route = await self.route_client.get_route_details(request.pickup_place_id, request.dropoff_place_id)

        estimate = calculate_price(
            route.distance_meters,
            route.duration_seconds,
            request.vehicle_type or DEFAULT_VEHICLE_TYPE.value,
            bool(request.round_trip),
            distance_text=route.distance_text,
            duration_text=route.duration_text,
        )
        price_estimates.labels(
            vehicle_type=estimate.breakdown.vehicle_type,
            round_trip=str(bool(request.round_trip)).lower(),
        ).inc()
        logger.info(
            f"Estimated {estimate.exact_price} {estimate.currency} for "
            f"{estimate.breakdown.vehicle_type} over {route.distance_meters} m"
        )
        return EstimateResult(success=True, data=project_estimate(estimate, projection))

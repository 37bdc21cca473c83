"""Route and place lookups against the Google Maps web services.

Lookups never fail from the caller's point of view: whatever goes wrong
upstream (no API key, timeout, HTTP error, non-OK status, unexpected
payload) is logged and answered with a fixed fallback so that quoting and
booking keep working while the provider is degraded.
"""
import logging
import time
from typing import Optional

import httpx

from chauffeur_pricing.core.config import settings
from chauffeur_pricing.core.enums import FallbackReason
from chauffeur_pricing.core.metrics import route_fallbacks, route_lookup_duration, route_lookups
from chauffeur_pricing.schemas.route import PlaceDetails, RouteDetails

logger = logging.getLogger(__name__)

FALLBACK_ROUTE = RouteDetails(
    distance_meters=25000,
    distance_text="25 km",
    duration_seconds=2400,
    duration_text="40 min",
    origin_address="Adresse de départ",
    destination_address="Adresse d'arrivée",
)

FALLBACK_LAT = 48.856614
FALLBACK_LNG = 2.352222

DIRECT = "direct"
PROXY = "proxy"


class RouteLookupError(Exception):
    def __init__(self, reason: FallbackReason, message: str):
        super().__init__(message)
        self.reason = reason


def fallback_place(place_id: str) -> PlaceDetails:
    return PlaceDetails(
        place_id=place_id or "",
        formatted_address=f"Adresse pour l'ID {place_id}",
        name=f"Lieu pour l'ID {place_id}",
        lat=FALLBACK_LAT,
        lng=FALLBACK_LNG,
    )


def build_route(distance: dict, duration: dict, origin: str, destination: str) -> RouteDetails:
    """Build RouteDetails from provider-shaped distance/duration objects."""
    if isinstance(distance["value"], bool) or isinstance(duration["value"], bool):
        raise RouteLookupError(FallbackReason.MALFORMED_RESPONSE, "Boolean distance or duration value")

    return RouteDetails(
        distance_meters=int(distance["value"]),
        distance_text=str(distance["text"]),
        duration_seconds=int(duration["value"]),
        duration_text=str(duration["text"]),
        origin_address=str(origin),
        destination_address=str(destination),
    )


class RouteLookupClient:
    """Distance/duration lookups between two Google place ids.

    In ``direct`` mode the Distance Matrix API is called with the server-side
    key. In ``proxy`` mode the request goes to the service's own
    ``/maps/route-details`` endpoint, which keeps the key off the client.
    Both modes produce the same RouteDetails.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        mode: str = DIRECT,
        proxy_url: str = settings.ROUTE_PROXY_URL,
        timeout: float = settings.ROUTE_LOOKUP_TIMEOUT,
        distance_matrix_url: str = settings.DISTANCE_MATRIX_URL,
        place_details_url: str = settings.PLACE_DETAILS_URL,
        language: str = settings.MAPS_LANGUAGE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if mode not in (DIRECT, PROXY):
            raise ValueError(f"Unknown route lookup mode: {mode}")
        self.api_key = api_key
        self.mode = mode
        self.proxy_url = proxy_url
        self.timeout = timeout
        self.distance_matrix_url = distance_matrix_url
        self.place_details_url = place_details_url
        self.language = language
        self.transport = transport

    @classmethod
    def from_settings(cls, mode: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        return cls(
            api_key=settings.GOOGLE_MAPS_API_KEY,
            mode=mode or settings.route_lookup_mode,
            proxy_url=settings.ROUTE_PROXY_URL,
            timeout=settings.ROUTE_LOOKUP_TIMEOUT,
            distance_matrix_url=settings.DISTANCE_MATRIX_URL,
            place_details_url=settings.PLACE_DETAILS_URL,
            language=settings.MAPS_LANGUAGE,
            transport=transport,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def get_route_details(self, origin_place_id: str, destination_place_id: str) -> RouteDetails:
        start_time = time.time()
        try:
            if not origin_place_id or not destination_place_id:
                raise RouteLookupError(FallbackReason.MISSING_PLACE_ID, "Origin and destination place ids are required")

            if self.mode == PROXY:
                route = await self._fetch_via_proxy(origin_place_id, destination_place_id)
            else:
                route = await self._fetch_direct(origin_place_id, destination_place_id)
        except RouteLookupError as e:
            return self._fallback(e.reason, str(e))
        except httpx.TimeoutException as e:
            return self._fallback(FallbackReason.TIMEOUT, f"Request timed out after {self.timeout}s: {e}")
        except httpx.HTTPError as e:
            return self._fallback(FallbackReason.HTTP_ERROR, str(e))
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            return self._fallback(FallbackReason.MALFORMED_RESPONSE, f"{type(e).__name__}: {e}")
        except Exception as e:
            logger.warning("Unexpected route lookup failure", exc_info=True)
            return self._fallback(FallbackReason.UNEXPECTED, str(e))
        finally:
            route_lookup_duration.labels(mode=self.mode).observe(time.time() - start_time)

        route_lookups.labels(mode=self.mode, outcome="ok").inc()
        logger.debug(
            f"Route {origin_place_id} -> {destination_place_id}: "
            f"{route.distance_meters} m, {route.duration_seconds} s"
        )
        return route

    async def _fetch_direct(self, origin_place_id: str, destination_place_id: str) -> RouteDetails:
        if not self.api_key:
            raise RouteLookupError(FallbackReason.MISSING_API_KEY, "Google Maps API key is not configured")

        params = {
            "origins": f"place_id:{origin_place_id}",
            "destinations": f"place_id:{destination_place_id}",
            "mode": "driving",
            "language": self.language,
            "key": self.api_key,
        }
        async with self._client() as client:
            response = await client.get(self.distance_matrix_url, params=params)
            response.raise_for_status()

        data = response.json()
        if data.get("status") != "OK":
            raise RouteLookupError(FallbackReason.PROVIDER_STATUS, f"Distance Matrix status {data.get('status')}")

        element = data["rows"][0]["elements"][0]
        if element.get("status") != "OK":
            raise RouteLookupError(FallbackReason.PROVIDER_STATUS, f"Distance Matrix element status {element.get('status')}")

        return build_route(
            element["distance"],
            element["duration"],
            data["origin_addresses"][0],
            data["destination_addresses"][0],
        )

    async def _fetch_via_proxy(self, origin_place_id: str, destination_place_id: str) -> RouteDetails:
        payload = {"originPlaceId": origin_place_id, "destinationPlaceId": destination_place_id}
        async with self._client() as client:
            response = await client.post(self.proxy_url, json=payload)
            response.raise_for_status()

        body = response.json()
        if not body.get("success"):
            raise RouteLookupError(FallbackReason.PROVIDER_STATUS, f"Route proxy error: {body.get('error')}")

        data = body["data"]
        return build_route(data["distance"], data["duration"], data["origin"], data["destination"])

    def _fallback(self, reason: FallbackReason, message: str) -> RouteDetails:
        logger.warning(f"Route lookup failed ({reason}), using fallback route: {message}")
        route_lookups.labels(mode=self.mode, outcome="fallback").inc()
        route_fallbacks.labels(reason=str(reason)).inc()
        return FALLBACK_ROUTE.model_copy()

    async def get_place_details(self, place_id: str) -> PlaceDetails:
        try:
            if not place_id:
                raise RouteLookupError(FallbackReason.MISSING_PLACE_ID, "Place id is required")
            if not self.api_key:
                raise RouteLookupError(FallbackReason.MISSING_API_KEY, "Google Maps API key is not configured")

            params = {
                "place_id": place_id,
                "fields": "formatted_address,geometry,name",
                "language": self.language,
                "key": self.api_key,
            }
            async with self._client() as client:
                response = await client.get(self.place_details_url, params=params)
                response.raise_for_status()

            data = response.json()
            if data.get("status") != "OK" or not data.get("result"):
                raise RouteLookupError(FallbackReason.PROVIDER_STATUS, f"Place Details status {data.get('status')}")

            result = data["result"]
            location = result["geometry"]["location"]
            return PlaceDetails(
                place_id=place_id,
                formatted_address=result["formatted_address"],
                name=result.get("name") or result["formatted_address"],
                lat=location["lat"],
                lng=location["lng"],
            )
        except RouteLookupError as e:
            logger.warning(f"Place lookup failed ({e.reason}), using fallback place: {e}")
        except httpx.HTTPError as e:
            logger.warning(f"Place lookup failed ({FallbackReason.HTTP_ERROR}), using fallback place: {e}")
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Place lookup failed ({FallbackReason.MALFORMED_RESPONSE}), using fallback place: {e}")
        except Exception:
            logger.warning("Unexpected place lookup failure, using fallback place", exc_info=True)
        return fallback_place(place_id)

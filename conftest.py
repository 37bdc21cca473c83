import pytest
import inspect
import httpx
from httpx import AsyncClient, ASGITransport
from datetime import datetime, timedelta, timezone

from chauffeur_pricing.main import app
from chauffeur_pricing.api.deps import get_direct_route_client, get_route_client
from chauffeur_pricing.services.routing import DIRECT, RouteLookupClient


def future_iso(hours: float = 24) -> str:
    return (datetime.now(timezone.utc) + timedelta(hours=hours)).isoformat()


def past_iso(hours: float = 24) -> str:
    return (datetime.now(timezone.utc) - timedelta(hours=hours)).isoformat()


def distance_matrix_payload(meters=10000, seconds=1200, distance_text="10,0 km", duration_text="20 min"):
    return {
        "status": "OK",
        "origin_addresses": ["Gare de Lyon, Paris, France"],
        "destination_addresses": ["Aéroport Paris-Orly, Orly, France"],
        "rows": [{
            "elements": [{
                "status": "OK",
                "distance": {"text": distance_text, "value": meters},
                "duration": {"text": duration_text, "value": seconds},
            }]
        }],
    }


class ProviderStub:
    """Stands in for the Google Maps HTTP API and records every request."""

    def __init__(self, json=None, status_code=200, exc=None):
        self.json = json
        self.status_code = status_code
        self.exc = exc
        self.calls = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.exc is not None:
            raise self.exc(f"simulated {self.exc.__name__}", request=request)
        return httpx.Response(self.status_code, json=self.json)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, mode=DIRECT, api_key="test-key", **kwargs) -> RouteLookupClient:
        return RouteLookupClient(api_key=api_key, mode=mode, transport=self.transport, **kwargs)


@pytest.fixture
def provider_stub():
    def _make(json=None, status_code=200, exc=None):
        return ProviderStub(json=json, status_code=status_code, exc=exc)
    return _make


@pytest.fixture
def ok_provider():
    return ProviderStub(json=distance_matrix_payload())


@pytest.fixture
def failing_provider():
    return ProviderStub(json={"error": "boom"}, status_code=500)


@pytest.fixture
async def test_client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def override_route_client():
    def _override(route_client: RouteLookupClient):
        app.dependency_overrides[get_route_client] = lambda: route_client
        app.dependency_overrides[get_direct_route_client] = lambda: route_client
        return route_client

    yield _override
    app.dependency_overrides.clear()


@pytest.fixture
def valid_estimate_data():
    return {
        "pickupPlaceId": "ChIJ_gare_de_lyon",
        "dropoffPlaceId": "ChIJ_orly",
        "pickupDateTime": future_iso(),
        "vehicleType": "premium",
        "passengers": 2,
        "luggage": 1,
        "roundTrip": False,
    }


@pytest.fixture
def valid_booking_data():
    pickup = datetime.now(timezone.utc) + timedelta(days=2)
    return {
        "pickupAddress": "Gare de Lyon, Paris",
        "dropoffAddress": "Aéroport Paris-Orly",
        "pickupDate": pickup.strftime("%Y-%m-%d"),
        "pickupTime": pickup.strftime("%H:%M"),
        "passengers": 2,
        "luggage": 2,
        "vehicleType": "sedan",
        "customerInfo": {
            "name": "Camille Martin",
            "email": "camille.martin@example.com",
            "phone": "06 12 34 56 78",
        },
        "roundTrip": False,
        "priceEstimate": {"exactPrice": 83.0},
    }


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "validation: marks tests related to request validation"
    )
    config.addinivalue_line(
        "markers", "routing: marks tests related to route lookups"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to handle asyncio tests
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)

import pytest

from chauffeur_pricing.main import app
from chauffeur_pricing.api.deps import get_estimate_handler
from chauffeur_pricing.services.validator import PICKUP_DATE_PAST
from conftest import distance_matrix_payload, past_iso


class TestPriceEndpoints:

    async def test_price_estimate_full(self, test_client, override_route_client, ok_provider, valid_estimate_data):
        override_route_client(ok_provider.client())

        response = await test_client.post("/price/estimate", json=valid_estimate_data)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["exactPrice"] == 47.0
        assert body["data"]["minPrice"] == 44.65
        assert body["data"]["maxPrice"] == 49.35
        assert body["data"]["currency"] == "EUR"
        assert body["data"]["breakdown"]["vehicleType"] == "premium"

    async def test_price_estimate_field(self, test_client, override_route_client, ok_provider, valid_estimate_data):
        override_route_client(ok_provider.client())

        response = await test_client.post("/price", json=valid_estimate_data)

        assert response.status_code == 200
        body = response.json()
        assert list(body["data"]) == ["estimate"]
        assert body["data"]["estimate"]["exactPrice"] == 47.0

    async def test_validation_failure(self, test_client, override_route_client, ok_provider, valid_estimate_data):
        override_route_client(ok_provider.client())
        valid_estimate_data["pickupDateTime"] = past_iso()

        response = await test_client.post("/price/estimate", json=valid_estimate_data)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Données invalides",
            "details": [PICKUP_DATE_PAST],
        }
        assert ok_provider.calls == []

    async def test_malformed_body(self, test_client, override_route_client, ok_provider, valid_estimate_data):
        override_route_client(ok_provider.client())
        valid_estimate_data["roundTrip"] = "sometimes"

        response = await test_client.post("/price", json=valid_estimate_data)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Données invalides"
        assert body["details"][0].startswith("roundTrip")
        assert ok_provider.calls == []

    async def test_provider_down(self, test_client, override_route_client, failing_provider, valid_estimate_data):
        override_route_client(failing_provider.client())
        valid_estimate_data["vehicleType"] = "green"

        response = await test_client.post("/price/estimate", json=valid_estimate_data)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        # 10 + 25 * 2.30 from the 25 km / 40 min fallback route
        assert body["data"]["exactPrice"] == 67.5
        assert body["data"]["details"]["formattedDuration"] == "40 min"

    async def test_round_trip_request(self, test_client, override_route_client, provider_stub, valid_estimate_data):
        stub = provider_stub(json=distance_matrix_payload(20000, 1800))
        override_route_client(stub.client())
        valid_estimate_data.update(vehicleType="green", roundTrip=True, returnDateTime=None)

        response = await test_client.post("/price/estimate", json=valid_estimate_data)
        assert response.status_code == 400

        valid_estimate_data["returnDateTime"] = "2999-01-01T10:00:00Z"
        response = await test_client.post("/price/estimate", json=valid_estimate_data)
        assert response.status_code == 200
        assert response.json()["data"]["exactPrice"] == 112.0
        assert len(stub.calls) == 1

    async def test_null_round_trip_is_one_way(self, test_client, override_route_client, ok_provider, valid_estimate_data):
        override_route_client(ok_provider.client())
        valid_estimate_data["roundTrip"] = None

        response = await test_client.post("/price/estimate", json=valid_estimate_data)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["exactPrice"] == 47.0
        assert data["breakdown"]["roundTrip"] is False

    async def test_unexpected_failure(self, test_client, valid_estimate_data):
        class BrokenHandler:
            async def estimate(self, request, projection):
                raise RuntimeError("tariff table unavailable")

        app.dependency_overrides[get_estimate_handler] = lambda: BrokenHandler()
        try:
            response = await test_client.post("/price/estimate", json=valid_estimate_data)
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Erreur lors du calcul du prix",
            "message": "tariff table unavailable",
        }

    @pytest.mark.parametrize("path", ["/price", "/price/estimate"])
    async def test_options_cors(self, test_client, path):
        response = await test_client.options(path)

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization"


class TestMapsEndpoints:

    async def test_route_details(self, test_client, override_route_client, ok_provider):
        override_route_client(ok_provider.client())

        response = await test_client.post(
            "/maps/route-details",
            json={"originPlaceId": "ChIJ_a", "destinationPlaceId": "ChIJ_b"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {
                "distance": {"text": "10,0 km", "value": 10000},
                "duration": {"text": "20 min", "value": 1200},
                "origin": "Gare de Lyon, Paris, France",
                "destination": "Aéroport Paris-Orly, Orly, France",
            },
        }

    async def test_route_details_fallback(self, test_client, override_route_client, failing_provider):
        override_route_client(failing_provider.client())

        response = await test_client.post(
            "/maps/route-details",
            json={"originPlaceId": "ChIJ_a", "destinationPlaceId": "ChIJ_b"},
        )

        data = response.json()["data"]
        assert data["distance"] == {"text": "25 km", "value": 25000}
        assert data["duration"] == {"text": "40 min", "value": 2400}

    async def test_route_details_requires_ids(self, test_client, override_route_client, ok_provider):
        override_route_client(ok_provider.client())

        response = await test_client.post("/maps/route-details", json={"originPlaceId": "ChIJ_a"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "IDs de lieux requis"}
        assert ok_provider.calls == []

    async def test_place_details(self, test_client, override_route_client, provider_stub):
        stub = provider_stub(json={
            "status": "OK",
            "result": {
                "formatted_address": "Orly, France",
                "name": "Aéroport Paris-Orly",
                "geometry": {"location": {"lat": 48.7262, "lng": 2.3652}},
            },
        })
        override_route_client(stub.client())

        response = await test_client.post("/maps/place-details", json={"placeId": "ChIJ_orly"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Aéroport Paris-Orly"
        assert data["geometry"]["location"] == {"lat": 48.7262, "lng": 2.3652}

    async def test_place_details_requires_id(self, test_client):
        response = await test_client.post("/maps/place-details", json={})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "ID de lieu requis"}


class TestMonitoring:

    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["dependencies"]["route_lookup_mode"] in ("direct", "proxy")

    async def test_root(self, test_client):
        response = await test_client.get("/")
        assert response.json()["docs"] == "/docs"

    async def test_metrics(self, test_client, override_route_client, ok_provider, valid_estimate_data):
        override_route_client(ok_provider.client())
        await test_client.post("/price/estimate", json=valid_estimate_data)

        response = await test_client.get("/metrics")

        assert response.status_code == 200
        assert "price_estimates_total" in response.text
        assert "route_lookups_total" in response.text
        assert "http_requests_total" in response.text

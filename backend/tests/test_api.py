"""
SkyRoutes Backend - API Integration Tests
==========================================

What:  End-to-end tests of every endpoint through the ASGI app.
How:   httpx AsyncClient over ASGITransport against the fixture dataset.
       The lifespan does not run under ASGITransport; the schema check has
       its own tests.

What we test:
    ✅ Response shapes and pagination metadata per endpoint
    ✅ Query string coercion (bad limit/offset/duration never fail)
    ✅ 400 on invalid direction, 500 with a generic body on database errors
    ✅ Request ID, CORS and gzip headers
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from skyroutes.exceptions import DatabaseError


def _ids(body):
    return [row["route_id"] for row in body["routes"]]


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestRouteSearchEndpoint:
    @pytest.mark.asyncio
    async def test_default_is_paged(self, test_client):
        response = await test_client.get("/routes")
        assert response.status_code == 200
        body = response.json()
        assert body["pagination"] == {
            "total": 17,
            "returnedCount": 17,
            "limit": 100,
            "offset": 0,
            "all": False,
        }
        assert _ids(body)[:4] == [11, 14, 2, 17]

    @pytest.mark.asyncio
    async def test_row_shape(self, test_client):
        response = await test_client.get("/routes", params={"limit": "1"})
        (row,) = response.json()["routes"]
        assert row == {
            "route_id": 11,
            "departure_iata": "FRA",
            "departure_city": "Frankfurt",
            "departure_country": "Germany",
            "arrival_iata": "MUC",
            "arrival_city": "Munich",
            "arrival_country": "Germany",
            "distance_km": 300.0,
            "duration_min": 55,
            "airline_iata": "LH",
            "airline_name": "Lufthansa",
        }

    @pytest.mark.asyncio
    async def test_filtered_pages(self, test_client):
        params = {
            "departure_country": "United Kingdom",
            "arrival_country": "France",
            "limit": "2",
        }
        first = (await test_client.get("/routes", params=params)).json()
        second = (await test_client.get("/routes", params={**params, "offset": "2"})).json()

        assert _ids(first) == [2, 1]
        assert _ids(second) == [4, 3]
        assert first["pagination"]["total"] == second["pagination"]["total"] == 4
        assert second["pagination"]["offset"] == 2

    @pytest.mark.asyncio
    async def test_all_true_omits_limit_and_offset(self, test_client):
        response = await test_client.get("/routes", params={"max_duration": "60", "all": "true"})
        body = response.json()
        assert _ids(body) == [11, 14]
        assert body["pagination"] == {"total": 2, "returnedCount": 2, "all": True}

    @pytest.mark.asyncio
    async def test_invalid_numbers_fall_back(self, test_client):
        response = await test_client.get(
            "/routes", params={"limit": "abc", "offset": "-3", "max_duration": "soon"}
        )
        assert response.status_code == 200
        pagination = response.json()["pagination"]
        assert (pagination["limit"], pagination["offset"], pagination["total"]) == (100, 0, 17)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params, total, limit, offset",
        [
            ({"max_duration": "1e20"}, 17, 100, 0),
            ({"min_duration": "99999999999999999999"}, 0, 100, 0),
            ({"limit": "99999999999999999999"}, 17, 100, 0),
            ({"offset": "99999999999999999999"}, 17, 100, 0),
            ({"airline_id": "99999999999999999999"}, 0, 100, 0),
            ({"limit": "1_0", "offset": "1_0", "max_duration": "6_0"}, 17, 100, 0),
        ],
    )
    async def test_oversized_numbers_never_fail(self, test_client, params, total, limit, offset):
        response = await test_client.get("/routes", params=params)
        assert response.status_code == 200
        pagination = response.json()["pagination"]
        assert pagination["total"] == total
        assert (pagination["limit"], pagination["offset"]) == (limit, offset)

    @pytest.mark.asyncio
    async def test_airport_routes_with_huge_airline_id(self, test_client):
        response = await test_client.get(
            "/airports/LHR/routes", params={"airline_id": "99999999999999999999"}
        )
        assert response.status_code == 200
        assert response.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_airline_id_no_duplicates(self, test_client):
        body = (await test_client.get("/routes", params={"airline_id": "1", "all": "true"})).json()
        ids = _ids(body)
        assert sorted(ids) == [1, 2, 6, 7, 14, 15]
        assert len(ids) == len(set(ids))

    @pytest.mark.asyncio
    async def test_no_match(self, test_client):
        body = (await test_client.get("/routes", params={"departure_iata": "XXX"})).json()
        assert body["routes"] == []
        assert body["pagination"]["total"] == 0

    @pytest.mark.asyncio
    async def test_repeatable(self, test_client):
        params = {"airline_name": "Air", "limit": "3", "offset": "1"}
        first = await test_client.get("/routes", params=params)
        second = await test_client.get("/routes", params=params)
        assert first.json() == second.json()


class TestAirportEndpoints:
    @pytest.mark.asyncio
    async def test_list_by_country(self, test_client):
        response = await test_client.get("/airports", params={"country": "France"})
        assert [a["iata"] for a in response.json()["airports"]] == ["CDG", "ORY"]

    @pytest.mark.asyncio
    async def test_airport_routes_default_all(self, test_client):
        response = await test_client.get("/airports/LHR/routes")
        assert response.status_code == 200
        body = response.json()
        assert body["airport"] == "LHR"
        assert body["direction"] == "departure"
        assert body["total"] == body["returnedCount"] == 6
        assert body["all"] is True
        assert _ids(body) == [14, 1, 4, 8, 6, 12]

    @pytest.mark.asyncio
    async def test_airport_routes_paged(self, test_client):
        response = await test_client.get(
            "/airports/LHR/routes", params={"all": "false", "limit": "2", "offset": "1"}
        )
        body = response.json()
        assert body["all"] is False
        assert body["total"] == 6
        assert _ids(body) == [1, 4]

    @pytest.mark.asyncio
    async def test_airport_arrivals_with_airline_name(self, test_client):
        response = await test_client.get(
            "/airports/LHR/routes",
            params={"direction": "arrival", "airline_name": "British"},
        )
        body = response.json()
        assert body["direction"] == "arrival"
        assert sorted(_ids(body)) == [7, 15]

    @pytest.mark.asyncio
    async def test_invalid_direction(self, test_client):
        response = await test_client.get("/airports/LHR/routes", params={"direction": "up"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "direction"
        assert body["request_id"] == response.headers["X-Request-ID"]


class TestCountryEndpoints:
    @pytest.mark.asyncio
    async def test_list_countries(self, test_client):
        body = (await test_client.get("/countries")).json()
        assert len(body["countries"]) == 6
        assert "" not in [c["country"] for c in body["countries"]]

    @pytest.mark.asyncio
    async def test_country_routes_with_destination(self, test_client):
        response = await test_client.get(
            "/countries/Germany/routes", params={"destination_country": "Italy"}
        )
        body = response.json()
        assert body["country"] == "Germany"
        assert body["destination_country"] == "Italy"
        assert body["all"] is False
        assert _ids(body) == [10, 9]

    @pytest.mark.asyncio
    async def test_country_routes_without_destination(self, test_client):
        body = (await test_client.get("/countries/United Kingdom/routes")).json()
        assert body["destination_country"] is None
        assert body["total"] == 8
        assert all(row["departure_country"] == "United Kingdom" for row in body["routes"])

    @pytest.mark.asyncio
    async def test_invalid_direction(self, test_client):
        response = await test_client.get(
            "/countries/Germany/routes", params={"direction": "inbound"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestCatalogEndpoints:
    @pytest.mark.asyncio
    async def test_airlines(self, test_client):
        body = (await test_client.get("/airlines")).json()
        assert body["airlines"][0] == {"id": 2, "iata": "AF", "name": "Air France"}

    @pytest.mark.asyncio
    async def test_stats(self, test_client):
        body = (await test_client.get("/stats")).json()
        assert body["counts"] == {"airports": 11, "airlines": 5, "routes": 17, "countries": 6}
        assert body["top_airlines"][0] == {"name": "British Airways", "route_count": 6}
        assert len(body["top_departure_airports"]) == 5


class TestErrorsAndHeaders:
    @pytest.mark.asyncio
    async def test_database_error_is_generic_500(self, test_client):
        failing = MagicMock()
        failing.get_stats = AsyncMock(
            side_effect=DatabaseError(
                message="Could not compute statistics.",
                context={"error_type": "OperationalError"},
            )
        )
        with patch("skyroutes.routes.stats.stats_service", failing):
            response = await test_client.get("/stats")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert body["message"] == "Internal server error"
        assert "OperationalError" not in response.text

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/airlines", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_cors_allows_any_origin(self, test_client):
        response = await test_client.get("/health", headers={"Origin": "http://example.com"})
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_large_responses_gzipped(self, test_client):
        response = await test_client.get(
            "/routes", params={"all": "true"}, headers={"Accept-Encoding": "gzip"}
        )
        assert response.headers["content-encoding"] == "gzip"
        assert response.json()["pagination"]["total"] == 17

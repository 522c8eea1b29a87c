from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

from services.external import base, darksky, geocode, hiking, meetup, tmdb, yelp
from services.resources.errors import DataSourceError


pytestmark = pytest.mark.anyio


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def upstream(monkeypatch):
    """Route every outbound client through a scripted MockTransport."""
    seen: List[httpx.Request] = []
    state: dict = {"handler": None}

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> List[httpx.Request]:
        state["handler"] = handler
        return seen

    def _transport(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return state["handler"](request)

    def _make_client(timeout, headers):
        return httpx.AsyncClient(
            transport=httpx.MockTransport(_transport),
            timeout=timeout,
            headers=headers,
        )

    monkeypatch.setattr(base, "_make_client", _make_client)
    return install


async def test_geocode_returns_first_result_and_sends_key(upstream):
    seen = upstream(
        lambda request: httpx.Response(
            200,
            json={
                "status": "OK",
                "results": [
                    {"formatted_address": "Seattle, WA, USA"},
                    {"formatted_address": "Seattle Hill, WA, USA"},
                ],
            },
        )
    )

    result = await geocode.geocode("seattle", api_key="geo-key")

    assert result == {"formatted_address": "Seattle, WA, USA"}
    assert seen[0].url.params["address"] == "seattle"
    assert seen[0].url.params["key"] == "geo-key"


async def test_geocode_zero_results_is_data_source_error(upstream):
    upstream(lambda request: httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []}))

    with pytest.raises(DataSourceError):
        await geocode.geocode("zzzz", api_key="geo-key")


async def test_darksky_reads_daily_data_from_coordinate_path(upstream):
    days = [{"summary": "Rain", "time": 1}, {"summary": "Sun", "time": 2}]
    seen = upstream(lambda request: httpx.Response(200, json={"daily": {"data": days}}))

    result = await darksky.daily_by_latlon(47.6, -122.3, api_key="sky-key")

    assert result == days
    assert seen[0].url.path == "/forecast/sky-key/47.6,-122.3"


async def test_yelp_sends_bearer_token(upstream):
    seen = upstream(lambda request: httpx.Response(200, json={"businesses": [{"name": "A"}]}))

    result = await yelp.businesses_by_latlon(47.6, -122.3, api_key="yelp-key")

    assert result == [{"name": "A"}]
    assert seen[0].headers["Authorization"] == "Bearer yelp-key"
    assert seen[0].url.params["term"] == "restaurants"


async def test_tmdb_searches_by_place_name(upstream):
    seen = upstream(lambda request: httpx.Response(200, json={"page": 1, "results": [{"title": "T"}]}))

    assert await tmdb.search_movies("Seattle", api_key="tmdb-key") == [{"title": "T"}]
    assert seen[0].url.params["query"] == "Seattle"
    assert seen[0].url.params["api_key"] == "tmdb-key"


async def test_meetup_and_trails_read_their_collections(upstream):
    def handler(request: httpx.Request) -> httpx.Response:
        if "meetup" in request.url.host:
            return httpx.Response(200, json={"events": [{"name": "E"}]})
        return httpx.Response(200, json={"trails": [{"name": "T"}], "success": 1})

    upstream(handler)

    assert await meetup.upcoming_by_latlon(1.0, 2.0, api_key="m") == [{"name": "E"}]
    assert await hiking.trails_by_latlon(1.0, 2.0, api_key="h") == [{"name": "T"}]


@pytest.mark.parametrize("status", [401, 404, 500, 503])
async def test_non_success_status_is_data_source_error(upstream, status: int):
    upstream(lambda request: httpx.Response(status, json={"error": "nope"}))

    with pytest.raises(DataSourceError) as info:
        await hiking.trails_by_latlon(1.0, 2.0, api_key="h")

    assert info.value.kind == "trails"
    assert str(status) in str(info.value)


async def test_invalid_json_is_data_source_error(upstream):
    upstream(lambda request: httpx.Response(200, content=b"<html>maintenance</html>"))

    with pytest.raises(DataSourceError):
        await yelp.businesses_by_latlon(1.0, 2.0, api_key="y")


async def test_missing_collection_is_data_source_error(upstream):
    upstream(lambda request: httpx.Response(200, json={"currently": {}}))

    with pytest.raises(DataSourceError):
        await darksky.daily_by_latlon(1.0, 2.0, api_key="d")


async def test_transport_failure_is_data_source_error(upstream):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    upstream(handler)

    with pytest.raises(DataSourceError):
        await meetup.upcoming_by_latlon(1.0, 2.0, api_key="m")

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from services.external import darksky, geocode, hiking, meetup, tmdb, yelp
from . import mappers

LOCATION = "location"
WEATHER = "weather"
YELP = "yelp"
MOVIES = "movies"
MEETUPS = "meetups"
TRAILS = "trails"

LIST_KINDS = (WEATHER, YELP, MOVIES, MEETUPS, TRAILS)

Ref = Optional[Mapping[str, Any]]


@dataclass(frozen=True)
class ResourceKind:
    """
    Everything the gateway needs to know about one resource kind.

    fetch(key, ref) returns the raw upstream item (``many=False``) or list of
    items; normalize(key, item) maps one raw item to a record dict.
    """

    name: str
    table: str
    key_column: str
    fetch: Callable[[Any, Ref], Awaitable[Any]]
    normalize: Callable[[Any, Dict[str, Any]], Dict[str, Any]]
    many: bool = True


def _coords(ref: Ref) -> tuple:
    ref = ref or {}
    return ref.get("latitude"), ref.get("longitude")


def _place_name(ref: Ref) -> Optional[str]:
    ref = ref or {}
    return ref.get("short_name") or ref.get("search_query")


def _item_only(mapper: Callable[[Dict[str, Any]], Dict[str, Any]]):
    def normalize(key: Any, item: Dict[str, Any]) -> Dict[str, Any]:  # noqa: ARG001
        return mapper(item)

    return normalize


def build_kinds(settings) -> Dict[str, ResourceKind]:
    """Bind each upstream client to its credential and return kinds by name."""
    timeout = settings.HTTP_TIMEOUT_SECONDS

    async def fetch_location(query: str, ref: Ref) -> Dict[str, Any]:  # noqa: ARG001
        return await geocode.geocode(query, api_key=settings.GEOCODE_API_KEY, timeout=timeout)

    def latlon_fetcher(fn, api_key: Optional[str]):
        async def fetch(location_id: int, ref: Ref) -> list:  # noqa: ARG001
            lat, lon = _coords(ref)
            return await fn(lat, lon, api_key=api_key, timeout=timeout)

        return fetch

    async def fetch_movies(location_id: int, ref: Ref) -> list:  # noqa: ARG001
        return await tmdb.search_movies(_place_name(ref), api_key=settings.MOVIE_API_KEY, timeout=timeout)

    kinds = [
        ResourceKind(
            name=LOCATION,
            table="locations",
            key_column="search_query",
            fetch=fetch_location,
            normalize=mappers.location,
            many=False,
        ),
        ResourceKind(
            name=WEATHER,
            table="weathers",
            key_column="location_id",
            fetch=latlon_fetcher(darksky.daily_by_latlon, settings.WEATHER_API_KEY),
            normalize=_item_only(mappers.weather),
        ),
        ResourceKind(
            name=YELP,
            table="yelps",
            key_column="location_id",
            fetch=latlon_fetcher(yelp.businesses_by_latlon, settings.YELP_API_KEY),
            normalize=_item_only(mappers.yelp),
        ),
        ResourceKind(
            name=MOVIES,
            table="movies",
            key_column="location_id",
            fetch=fetch_movies,
            normalize=_item_only(mappers.movie),
        ),
        ResourceKind(
            name=MEETUPS,
            table="meetups",
            key_column="location_id",
            fetch=latlon_fetcher(meetup.upcoming_by_latlon, settings.MEETUP_API_KEY),
            normalize=_item_only(mappers.meetup),
        ),
        ResourceKind(
            name=TRAILS,
            table="trails",
            key_column="location_id",
            fetch=latlon_fetcher(hiking.trails_by_latlon, settings.TRAIL_API_KEY),
            normalize=_item_only(mappers.trail),
        ),
    ]
    return {k.name: k for k in kinds}

from __future__ import annotations

import json
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import ValidationError

from services.resources import kinds
from services.resources.gateway import ResourceGateway

from ..models import LocationQuery, LocationRef

router = APIRouter(tags=["resources"])


_DATA_HELP = "JSON-encoded search text (location) or location object (everything else)"


def get_gateway(request: Request) -> ResourceGateway:
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise HTTPException(status_code=503, detail="store not ready")
    return gateway


def _parse_search(data: str) -> str:
    # Accept both a JSON string ("\"Seattle\"") and bare text (Seattle).
    try:
        decoded: Any = json.loads(data)
    except ValueError:
        decoded = data
    if isinstance(decoded, dict):
        decoded = decoded.get("search_query") or decoded.get("query")
        if not isinstance(decoded, str):
            decoded = ""
    elif not isinstance(decoded, str):
        # null, true, 1.50 and friends are searched for exactly as sent
        decoded = data
    try:
        return LocationQuery(search_query=decoded.strip()).search_query
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail="data must be non-empty search text") from exc


def _parse_ref(data: str) -> LocationRef:
    try:
        return LocationRef.model_validate_json(data)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail="data must be a JSON object with an integer id and coordinates",
        ) from exc


async def _resolve_list(kind: str, data: str, gateway: ResourceGateway) -> List[Dict[str, Any]]:
    ref = _parse_ref(data)
    return await gateway.resolve(kind, ref.id, ref.model_dump())


@router.get("/location")
async def get_location(
    data: str = Query(..., description=_DATA_HELP),
    gateway: ResourceGateway = Depends(get_gateway),
):
    return await gateway.resolve(kinds.LOCATION, _parse_search(data))


@router.get("/weather")
async def get_weather(
    data: str = Query(..., description=_DATA_HELP),
    gateway: ResourceGateway = Depends(get_gateway),
):
    return await _resolve_list(kinds.WEATHER, data, gateway)


@router.get("/yelp")
async def get_yelp(
    data: str = Query(..., description=_DATA_HELP),
    gateway: ResourceGateway = Depends(get_gateway),
):
    return await _resolve_list(kinds.YELP, data, gateway)


@router.get("/movies")
async def get_movies(
    data: str = Query(..., description=_DATA_HELP),
    gateway: ResourceGateway = Depends(get_gateway),
):
    return await _resolve_list(kinds.MOVIES, data, gateway)


@router.get("/meetups")
async def get_meetups(
    data: str = Query(..., description=_DATA_HELP),
    gateway: ResourceGateway = Depends(get_gateway),
):
    return await _resolve_list(kinds.MEETUPS, data, gateway)


@router.get("/trails")
async def get_trails(
    data: str = Query(..., description=_DATA_HELP),
    gateway: ResourceGateway = Depends(get_gateway),
):
    return await _resolve_list(kinds.TRAILS, data, gateway)

from typing import Any, Dict, List, Optional

from .base import DEFAULT_TIMEOUT, get_json, items_at

BASE = "https://api.meetup.com/find/upcoming_events"


async def upcoming_by_latlon(
    lat: float, lon: float, *, api_key: Optional[str], timeout: Optional[float] = DEFAULT_TIMEOUT
) -> List[Dict[str, Any]]:
    data = await get_json(
        BASE,
        source="meetups",
        params={"lat": lat, "lon": lon, "key": api_key or "", "sign": "true"},
        timeout=timeout,
    )
    return items_at(data, "events", source="meetups")

from typing import Any, Dict, List, Optional

from .base import DEFAULT_TIMEOUT, get_json, items_at

BASE = "https://www.hikingproject.com/data/get-trails"
MAX_DISTANCE_MI = 10


async def trails_by_latlon(
    lat: float, lon: float, *, api_key: Optional[str], timeout: Optional[float] = DEFAULT_TIMEOUT
) -> List[Dict[str, Any]]:
    data = await get_json(
        BASE,
        source="trails",
        params={"lat": lat, "lon": lon, "maxDistance": MAX_DISTANCE_MI, "key": api_key or ""},
        timeout=timeout,
    )
    return items_at(data, "trails", source="trails")

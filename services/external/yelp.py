from typing import Any, Dict, List, Optional

from .base import DEFAULT_TIMEOUT, get_json, items_at

BASE = "https://api.yelp.com/v3/businesses/search"
TERM = "restaurants"


async def businesses_by_latlon(
    lat: float, lon: float, *, api_key: Optional[str], timeout: Optional[float] = DEFAULT_TIMEOUT
) -> List[Dict[str, Any]]:
    data = await get_json(
        BASE,
        source="yelp",
        params={"term": TERM, "latitude": lat, "longitude": lon},
        headers={"Authorization": f"Bearer {api_key or ''}"},
        timeout=timeout,
    )
    return items_at(data, "businesses", source="yelp")

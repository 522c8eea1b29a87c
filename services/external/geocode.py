# services/external/geocode.py
from typing import Any, Dict, Optional

from .base import DEFAULT_TIMEOUT, get_json, items_at
from services.resources.errors import DataSourceError

BASE = "https://maps.googleapis.com/maps/api/geocode/json"


async def geocode(query: str, *, api_key: Optional[str], timeout: Optional[float] = DEFAULT_TIMEOUT) -> Dict[str, Any]:
    """Return the first Google geocoding result for free-text *query*."""
    data = await get_json(
        BASE,
        source="location",
        params={"address": query, "key": api_key or ""},
        timeout=timeout,
    )
    results = items_at(data, "results", source="location")
    if not results:
        # ZERO_RESULTS still comes back as HTTP 200
        raise DataSourceError(f"no geocoding result for {query!r}", kind="location")
    return results[0]

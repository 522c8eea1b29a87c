# services/external/darksky.py
from typing import Any, Dict, List, Optional

from .base import DEFAULT_TIMEOUT, get_json, items_at

BASE = "https://api.darksky.net/forecast"


async def daily_by_latlon(
    lat: float, lon: float, *, api_key: Optional[str], timeout: Optional[float] = DEFAULT_TIMEOUT
) -> List[Dict[str, Any]]:
    """Return the daily forecast blocks (``daily.data``) for the coordinates."""
    data = await get_json(f"{BASE}/{api_key or ''}/{lat},{lon}", source="weather", timeout=timeout)
    return items_at(data, "daily", "data", source="weather")

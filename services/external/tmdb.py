# services/external/tmdb.py
from typing import Any, Dict, List, Optional

from .base import DEFAULT_TIMEOUT, get_json, items_at

BASE = "https://api.themoviedb.org/3/search/movie"


async def search_movies(
    query: str, *, api_key: Optional[str], timeout: Optional[float] = DEFAULT_TIMEOUT
) -> List[Dict[str, Any]]:
    """Search TMDb movies by a place name (the location's short name)."""
    data = await get_json(
        BASE,
        source="movies",
        params={"api_key": api_key or "", "query": query},
        timeout=timeout,
    )
    return items_at(data, "results", source="movies")

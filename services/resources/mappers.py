"""Per-kind normalizers: upstream item shape -> stored record shape.

Every function here is pure. Missing required fields raise KeyError /
TypeError / IndexError, and epochs out of range raise OverflowError; the
gateway reports all of these as a malformed payload.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p/w500"


def epoch_to_date_text(seconds: float) -> str:
    """UNIX seconds -> ``"Mon Jan 01 2018"`` (UTC calendar date)."""
    return datetime.fromtimestamp(float(seconds), tz=timezone.utc).strftime("%a %b %d %Y")


def split_date_time(stamp: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Split ``"2023-05-01T14:30:00"`` (or the space-separated form) into
    ``("2023-05-01", "14:30:00")``.
    """
    if not stamp:
        return None, None
    text = str(stamp)
    date_part = text[0:10]
    time_part = text[11:19] or None
    return date_part, time_part


def image_url(path: Optional[str], base: str = TMDB_IMAGE_BASE) -> Optional[str]:
    if not path:
        return None
    return f"{base}{path}"


def location(query: str, result: Dict[str, Any]) -> Dict[str, Any]:
    geo = result["geometry"]["location"]
    components = result.get("address_components") or []
    short_name = components[0].get("short_name") if components else None
    return {
        "search_query": query,
        "formatted_query": result["formatted_address"],
        "latitude": geo["lat"],
        "longitude": geo["lng"],
        "short_name": short_name,
    }


def weather(day: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "forecast": day["summary"],
        "time": epoch_to_date_text(day["time"]),
    }


def yelp(business: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": business["name"],
        "image_url": business.get("image_url"),
        "price": business.get("price"),
        "rating": business.get("rating"),
        "url": business.get("url"),
    }


def movie(item: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": item["title"],
        "overview": item.get("overview"),
        "average_votes": item.get("vote_average"),
        "total_votes": item.get("vote_count"),
        "image_url": image_url(item.get("poster_path")),
        "popularity": item.get("popularity"),
        "released_on": item.get("release_date"),
    }


def meetup(event: Dict[str, Any]) -> Dict[str, Any]:
    # Meetup reports `created` in epoch milliseconds
    return {
        "link": event["link"],
        "name": event["name"],
        "creation_date": epoch_to_date_text(float(event["created"]) / 1000.0),
        "host": event["group"]["name"],
    }


def trail(item: Dict[str, Any]) -> Dict[str, Any]:
    condition_date, condition_time = split_date_time(item.get("conditionDate"))
    return {
        "name": item["name"],
        "location": item.get("location"),
        "length": item.get("length"),
        "stars": item.get("stars"),
        "star_votes": item.get("starVotes"),
        "summary": item.get("summary"),
        "trail_url": item.get("url"),
        "conditions": item.get("conditionDetails"),
        "condition_date": condition_date,
        "condition_time": condition_time,
    }

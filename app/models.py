from pydantic import BaseModel, Field
from typing import Optional


class LocationRef(BaseModel):
    """A previously resolved location as echoed back by the client."""

    id: int
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    search_query: Optional[str] = None
    formatted_query: Optional[str] = None
    short_name: Optional[str] = None


class LocationQuery(BaseModel):
    search_query: str = Field(..., min_length=1)

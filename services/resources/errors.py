from __future__ import annotations

from typing import Optional


class ResourceError(Exception):
    """Base class for failures while resolving a resource."""

    def __init__(self, message: str, *, kind: Optional[str] = None) -> None:
        super().__init__(message)
        self.kind = kind


class DataSourceError(ResourceError):
    """Upstream API unreachable, non-2xx, or returned an unexpected shape."""


class StoreError(ResourceError):
    """Persistence read or write failed."""

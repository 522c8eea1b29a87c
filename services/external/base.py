import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from services.resources.errors import DataSourceError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _make_client(timeout: Optional[float], headers: Optional[Mapping[str, str]]) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout, headers=headers)


async def get_json(
    url: str,
    *,
    source: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> Any:
    """
    GET *url* and decode the JSON body.

    Any transport failure, non-2xx status or undecodable body is raised as
    DataSourceError tagged with *source*. The request URL is never logged
    since most upstreams take their credential as a query param.
    """
    try:
        async with _make_client(timeout, headers) as cx:
            r = await cx.get(url, params=params)
            r.raise_for_status()
            return r.json()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.warning("[FETCH] %s upstream returned HTTP %s", source, status)
        raise DataSourceError(f"{source} upstream returned HTTP {status}", kind=source) from exc
    except httpx.HTTPError as exc:
        logger.warning("[FETCH] %s upstream unreachable: %s", source, exc.__class__.__name__)
        raise DataSourceError(f"{source} upstream request failed", kind=source) from exc
    except ValueError as exc:
        raise DataSourceError(f"{source} upstream returned invalid JSON", kind=source) from exc


def items_at(payload: Any, *path: str, source: str) -> list:
    """Walk *path* into a decoded body and return the list found there."""
    node = payload
    for key in path:
        if not isinstance(node, dict) or key not in node:
            raise DataSourceError(f"{source} payload missing '{'.'.join(path)}'", kind=source)
        node = node[key]
    if not isinstance(node, list):
        raise DataSourceError(f"{source} payload '{'.'.join(path)}' is not a list", kind=source)
    return node

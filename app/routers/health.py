from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request


router = APIRouter()


@router.get("/health", include_in_schema=False)
async def service_health(request: Request) -> Dict[str, Any]:
    store = getattr(request.app.state, "store", None)
    db_ok = await store.ping() if store is not None and store.is_open else False
    gateway = getattr(request.app.state, "gateway", None)

    return {
        "ok": True,
        "service": "city-explorer-backend",
        "time": datetime.now(timezone.utc).isoformat(),
        "db": db_ok,
        "pending_writes": gateway.pending_writes if gateway is not None else 0,
    }

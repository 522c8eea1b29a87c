import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from services.resources.errors import ResourceError
from services.resources.gateway import ResourceGateway
from services.resources.kinds import build_kinds

from .config import settings
from .db import Store
from .routers import health as health_router, resources


logger = logging.getLogger(__name__)

GENERIC_ERROR = "Sorry, something went wrong"


def custom_generate_unique_id(route):
    # method + path is always unique
    return f"{list(route.methods)[0].lower()}_{route.path.replace('/', '_').strip('_')}"


app = FastAPI(
    title="City Explorer Backend",
    version="0.1.0",
    generate_unique_id_function=custom_generate_unique_id,
)


def _failure() -> JSONResponse:
    # Callers are not told whether the store or an upstream failed.
    return JSONResponse(status_code=500, content={"ok": False, "data": None, "error": GENERIC_ERROR})


@app.exception_handler(ResourceError)
async def _resource_error_handler(request: Request, exc: ResourceError):
    logger.error("[API] %s %s failed (%s): %s", request.method, request.url.path, exc.__class__.__name__, exc)
    return _failure()


@app.exception_handler(Exception)
async def _global_exception_handler(request: Request, exc: Exception):
    logger.exception("[API] %s %s crashed: %s", request.method, request.url.path, exc)
    return _failure()


@app.on_event("startup")
async def _open_store():
    store = Store.from_settings(settings)
    app.state.store = store
    app.state.gateway = ResourceGateway(store, build_kinds(settings))
    try:
        await store.open()
        logger.info("[DB] ready")
    except ResourceError as exc:  # pragma: no cover - startup diagnostics
        # keep serving; the next request that needs the store retries the open
        # and answers with StoreError while the database stays unreachable
        logger.exception("[DB] startup open failed: %s", exc)


@app.on_event("shutdown")
async def _close_store():
    gateway = getattr(app.state, "gateway", None)
    if gateway is not None:
        await gateway.drain()
    store = getattr(app.state, "store", None)
    if store is not None:
        await store.close()


app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in (settings.CORS_ORIGINS or "*").split(",")],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health_router.router)
app.include_router(resources.router)

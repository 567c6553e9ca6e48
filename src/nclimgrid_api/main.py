"""nClimGrid temperature API - monthly average temperature points for map rendering.

The startup module is imported first so .env values and logging are in
place before settings are loaded.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import nclimgrid_api.startup  # noqa: F401

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nclimgrid_api.config import get_settings
from nclimgrid_api.errors import TemperatureServiceError, error_payload, service_error_handler
from nclimgrid_api.routers import root, temperature

logger = logging.getLogger(__name__)


def _log_startup_configuration() -> None:
    settings = get_settings()
    logger.info(
        "Startup config: collection=%s bbox=%s maxPoints=%s assetKey=%s",
        settings.collection,
        settings.bbox.as_list(),
        settings.max_points,
        settings.asset_key or "<position 1>",
    )
    logger.info(
        "Startup config: search=%s sign=%s timeout=%ss cors=%s",
        settings.stac_search_url,
        settings.sign_url,
        settings.http_timeout_seconds,
        "*" if settings.cors_origins == ("*",) else f"{len(settings.cors_origins)} origins",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log the effective configuration once the server starts."""
    _log_startup_configuration()
    yield


app = FastAPI(title="nClimGrid temperature API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def _log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path} - Origin: {request.headers.get('origin', 'n/a')}")
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        message = f"Not found: {request.method} {request.url.path}"
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=error_payload(message), headers=exc.headers)


@app.exception_handler(Exception)
async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error")
    return JSONResponse(status_code=500, content=error_payload("Internal server error"))


app.add_exception_handler(TemperatureServiceError, service_error_handler)

app.include_router(root.router)
app.include_router(temperature.router, prefix="/temperature", tags=["Temperature"])

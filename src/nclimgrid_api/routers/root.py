"""Root API endpoints."""

import sys
from importlib.metadata import version

from fastapi import APIRouter, Request

from nclimgrid_api import __version__
from nclimgrid_api.schemas import AppInfo, HealthStatus, Link, RootResponse, Status

router = APIRouter(tags=["System"])


@router.get("/")
def read_index(request: Request) -> RootResponse:
    """Return a welcome message with navigation links."""
    base = str(request.base_url).rstrip("/")
    return RootResponse(
        message="Welcome to the nClimGrid temperature API",
        links=[
            Link(href=f"{base}/temperature/{{date}}", rel="temperature", title="Monthly average temperature"),
            Link(href=f"{base}/docs", rel="docs", title="API Docs"),
            Link(href=f"{base}/health", rel="health", title="Health check"),
        ],
    )


@router.get("/health")
def health() -> HealthStatus:
    """Return health status for container health checks."""
    return HealthStatus(status=Status.HEALTHY)


@router.get("/info")
def info() -> AppInfo:
    """Return application version and environment info."""
    return AppInfo(
        app_version=__version__,
        python_version=sys.version,
        fastapi_version=version("fastapi"),
        httpx_version=version("httpx"),
        rasterio_version=version("rasterio"),
    )

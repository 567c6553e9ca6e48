"""Pydantic response models."""

from enum import StrEnum

from pydantic import BaseModel


class Status(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"


class HealthStatus(BaseModel):
    """Health check response."""

    status: Status


class Link(BaseModel):
    """Hypermedia link."""

    href: str
    rel: str
    title: str


class RootResponse(BaseModel):
    """Root endpoint response with navigation links."""

    message: str
    links: list[Link]


class AppInfo(BaseModel):
    """Application version and environment info."""

    app_version: str
    python_version: str
    fastapi_version: str
    httpx_version: str
    rasterio_version: str


class TemperaturePoint(BaseModel):
    """Center of one raster cell with its monthly average temperature (F)."""

    lat: float
    lon: float
    tavg: float


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""

    error: str

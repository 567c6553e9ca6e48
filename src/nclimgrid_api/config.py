"""Deployment configuration loaded once from environment variables."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from nclimgrid_api.raster.grid import BoundingBox

logger = logging.getLogger(__name__)

DEFAULT_STAC_SEARCH_URL = "https://planetarycomputer.microsoft.com/api/stac/v1/search"
DEFAULT_SIGN_URL = "https://planetarycomputer.microsoft.com/api/sas/v1/sign"
DEFAULT_COLLECTION = "noaa-nclimgrid-monthly"
# West Virginia
DEFAULT_BBOX = BoundingBox(west=-82.644739, south=37.201483, east=-77.719519, north=40.638801)
DEFAULT_MAX_POINTS = 10000
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0
# Local Vite dev server; deployed frontends come from FRONTEND_URL
DEFAULT_CORS_ORIGINS = ("http://localhost:5173",)


@dataclass(frozen=True)
class Settings:
    stac_search_url: str = DEFAULT_STAC_SEARCH_URL
    sign_url: str = DEFAULT_SIGN_URL
    collection: str = DEFAULT_COLLECTION
    bbox: BoundingBox = DEFAULT_BBOX
    max_points: int = DEFAULT_MAX_POINTS
    asset_key: str | None = None
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS


def _env_str(name: str, default: str) -> str:
    return os.getenv(name, "").strip() or default


def _env_bbox() -> BoundingBox:
    raw = os.getenv("NCLIMGRID_BBOX", "").strip()
    if not raw:
        return DEFAULT_BBOX

    try:
        return BoundingBox.from_sequence([float(part) for part in raw.split(",")])
    except ValueError:
        logger.warning("Ignoring invalid NCLIMGRID_BBOX '%s'; using default", raw)
        return DEFAULT_BBOX


def _env_max_points() -> int:
    raw = os.getenv("NCLIMGRID_MAX_POINTS", "").strip()
    if not raw:
        return DEFAULT_MAX_POINTS

    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        logger.warning("Ignoring invalid NCLIMGRID_MAX_POINTS '%s'; using %s", raw, DEFAULT_MAX_POINTS)
        return DEFAULT_MAX_POINTS
    return value


def _env_timeout() -> float:
    raw = os.getenv("NCLIMGRID_HTTP_TIMEOUT_SECONDS", "").strip()
    try:
        value = float(raw) if raw else DEFAULT_HTTP_TIMEOUT_SECONDS
    except ValueError:
        value = DEFAULT_HTTP_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_HTTP_TIMEOUT_SECONDS


def _env_cors_origins() -> tuple[str, ...]:
    raw = os.getenv("NCLIMGRID_CORS_ORIGINS", "").strip()
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()] or list(DEFAULT_CORS_ORIGINS)

    frontend_url = os.getenv("FRONTEND_URL", "").strip()
    if frontend_url and "*" not in origins and frontend_url not in origins:
        origins.append(frontend_url)
    return tuple(origins)


def load_settings() -> Settings:
    """Build settings from the environment, falling back to defaults on bad values."""
    return Settings(
        stac_search_url=_env_str("NCLIMGRID_STAC_SEARCH_URL", DEFAULT_STAC_SEARCH_URL),
        sign_url=_env_str("NCLIMGRID_SIGN_URL", DEFAULT_SIGN_URL),
        collection=_env_str("NCLIMGRID_COLLECTION", DEFAULT_COLLECTION),
        bbox=_env_bbox(),
        max_points=_env_max_points(),
        asset_key=os.getenv("NCLIMGRID_ASSET_KEY", "").strip() or None,
        http_timeout_seconds=_env_timeout(),
        cors_origins=_env_cors_origins(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()

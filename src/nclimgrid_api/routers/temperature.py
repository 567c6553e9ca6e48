"""Monthly temperature point endpoint."""

import logging
from collections.abc import AsyncIterator

import httpx
from fastapi import APIRouter, Depends

from nclimgrid_api.config import Settings, get_settings
from nclimgrid_api.errors import ContractViolationError, TemperatureServiceError, UpstreamUnavailableError
from nclimgrid_api.sampling import TemperatureSampler, build_sampler
from nclimgrid_api.schemas import ErrorResponse, TemperaturePoint

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_http_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    """Yield a per-request HTTP client; the timeout is the only one applied."""
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds, follow_redirects=True) as client:
        yield client


def get_sampler(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> TemperatureSampler:
    return build_sampler(settings, client)


@router.get(
    "/{date}",
    response_model=list[TemperaturePoint],
    responses={
        400: {"model": ErrorResponse, "description": "Malformed date"},
        404: {"model": ErrorResponse, "description": "No catalog item for the month"},
        500: {"model": ErrorResponse, "description": "Raster could not be decoded"},
        502: {"model": ErrorResponse, "description": "Upstream catalog, signer or raster host failed"},
    },
)
async def read_temperature(date: str, sampler: TemperatureSampler = Depends(get_sampler)) -> list[TemperaturePoint]:
    """Return Fahrenheit tavg points covering the configured region for a YYYY-MM-DD date."""
    try:
        return await sampler.sample(date)
    except ContractViolationError:
        logger.exception(f"Upstream contract violation while sampling {date}")
        raise
    except UpstreamUnavailableError as exc:
        logger.warning(f"Upstream unavailable while sampling {date}: {exc}")
        raise
    except TemperatureServiceError as exc:
        logger.info(f"Sampling {date} failed: {exc.code} {exc}")
        raise

"""Error taxonomy for the temperature sampling pipeline."""

from fastapi import Request
from fastapi.responses import JSONResponse


class TemperatureServiceError(Exception):
    """Base class for failures that abort a sampling request."""

    status_code = 500
    code = "InternalError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(TemperatureServiceError):
    """Request parameters are malformed."""

    status_code = 400
    code = "InvalidInput"


class NotFoundError(TemperatureServiceError):
    """The catalog has no item for the requested month and region."""

    status_code = 404
    code = "NotFound"


class UpstreamUnavailableError(TemperatureServiceError):
    """Transport failure talking to the catalog, signer or raster host."""

    status_code = 502
    code = "UpstreamUnavailable"


class ContractViolationError(TemperatureServiceError):
    """An upstream service answered with a shape that cannot be used."""

    status_code = 502
    code = "ContractViolation"


class RasterDecodeError(TemperatureServiceError):
    """Downloaded bytes are not a usable raster."""

    status_code = 500
    code = "DecodeError"


def error_payload(message: str) -> dict[str, str]:
    return {"error": message}


async def service_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = getattr(exc, "status_code", 500)
    message = getattr(exc, "message", None) or str(exc)
    return JSONResponse(status_code=status_code, content=error_payload(message))

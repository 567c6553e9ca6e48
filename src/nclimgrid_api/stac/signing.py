"""Exchange unsigned asset hrefs for time-limited SAS URLs."""

import logging

import httpx
from pydantic import ValidationError

from nclimgrid_api.errors import ContractViolationError, UpstreamUnavailableError
from nclimgrid_api.stac.schemas import SignedHref

logger = logging.getLogger(__name__)


class AssetSigner:
    """Call the signing endpoint once per asset.

    The signed URL carries its own expiry and is never cached.
    """

    def __init__(self, client: httpx.AsyncClient, *, sign_url: str) -> None:
        self._client = client
        self._sign_url = sign_url

    async def sign(self, href: str) -> str:
        logger.info(f"Signing URL: {href}")
        try:
            response = await self._client.get(self._sign_url, params={"href": href})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(f"Signing request failed: {exc}") from exc

        try:
            signed = SignedHref.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ContractViolationError("No `href` field returned from sign API") from exc

        if signed.expiry is not None:
            logger.debug(f"Signed URL expires at {signed.expiry.isoformat()}")
        return signed.href

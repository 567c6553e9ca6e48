import asyncio
import json

import httpx
import pytest

from nclimgrid_api.errors import ContractViolationError, NotFoundError, UpstreamUnavailableError
from nclimgrid_api.raster.grid import BoundingBox
from nclimgrid_api.stac.search import CatalogSearchClient, month_timestamp

SEARCH_URL = "https://stac.example.test/api/stac/v1/search"
BBOX = BoundingBox(west=-82.644739, south=37.201483, east=-77.719519, north=40.638801)


def _search(handler, year: int = 2022, month: int = 7):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            catalog = CatalogSearchClient(client, search_url=SEARCH_URL, collection="noaa-nclimgrid-monthly")
            return await catalog.search(BBOX, year, month)

    return asyncio.run(run())


def test_month_timestamp_uses_the_fifteenth() -> None:
    assert month_timestamp(2022, 7) == "2022-07-15T00:00:00Z"
    assert month_timestamp(1999, 12) == "1999-12-15T00:00:00Z"


def test_search_posts_collection_bbox_and_mid_month_datetime() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(
            200,
            json={
                "type": "FeatureCollection",
                "features": [
                    {
                        "id": "nclimgrid-202207",
                        "assets": {
                            "prcp": {"href": "https://blob.test/prcp.tif"},
                            "tavg": {"href": "https://blob.test/tavg.tif"},
                        },
                    }
                ],
            },
        )

    items = _search(handler)

    assert len(captured) == 1
    request = captured[0]
    assert request.method == "POST"
    assert str(request.url) == SEARCH_URL
    assert json.loads(request.content) == {
        "collections": ["noaa-nclimgrid-monthly"],
        "bbox": [-82.644739, 37.201483, -77.719519, 40.638801],
        "datetime": "2022-07-15T00:00:00Z",
    }
    assert [item.id for item in items] == ["nclimgrid-202207"]
    assert list(items[0].assets) == ["prcp", "tavg"]


@pytest.mark.parametrize("payload", [{"features": []}, {"type": "FeatureCollection"}])
def test_search_without_features_is_not_found(payload: dict) -> None:
    with pytest.raises(NotFoundError):
        _search(lambda request: httpx.Response(200, json=payload))


def test_search_http_error_is_upstream_unavailable() -> None:
    with pytest.raises(UpstreamUnavailableError):
        _search(lambda request: httpx.Response(503, text="maintenance"))


def test_search_transport_error_is_upstream_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamUnavailableError):
        _search(handler)


def test_search_non_json_body_is_contract_violation() -> None:
    with pytest.raises(ContractViolationError):
        _search(lambda request: httpx.Response(200, text="<html>oops</html>"))


def test_search_asset_without_href_is_contract_violation() -> None:
    payload = {"features": [{"assets": {"tavg": {"type": "image/tiff"}}}]}
    with pytest.raises(ContractViolationError):
        _search(lambda request: httpx.Response(200, json=payload))

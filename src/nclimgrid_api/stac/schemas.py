"""Pydantic models for STAC search and SAS signing payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StacSearchRequest(BaseModel):
    """Body of a STAC API item search."""

    collections: list[str] = Field(..., min_length=1)
    bbox: list[float] = Field(..., min_length=4, max_length=4, description="Bounding box [west, south, east, north]")
    datetime: str = Field(..., description="ISO-8601 instant inside the requested month")


class StacAsset(BaseModel):
    """One downloadable file referenced by a STAC item."""

    model_config = ConfigDict(extra="allow")

    href: str = Field(..., min_length=1)
    type: str | None = None
    title: str | None = None


class StacItem(BaseModel):
    """STAC item as returned in a search feature collection.

    ``assets`` keeps the declaration order of the upstream JSON document.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    collection: str | None = None
    assets: dict[str, StacAsset] = Field(default_factory=dict)


class StacSearchResponse(BaseModel):
    """Search response; a missing ``features`` member means no matches."""

    model_config = ConfigDict(extra="allow")

    features: list[StacItem] = Field(default_factory=list)


class SignedHref(BaseModel):
    """Response of the SAS signing endpoint."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    href: str = Field(..., min_length=1)
    expiry: datetime | None = Field(default=None, alias="msft:expiry")

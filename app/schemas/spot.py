"""Spot Schemas - listing create/edit bodies and the three response shapes.

Invariants:
    - SpotBody: address/city/state/country/description non-blank, lat in [-90, 90],
      lng in [-180, 180], name 1-50 chars, price >= 0
    - SpotSummary (collection entries) never carries raw images or reviews
    - SpotDetail.avg_star_rating is None for an unreviewed spot (not 0)
    - SPOT_FIELD_MESSAGES gives the single client-facing message per field
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from app.core.domain_types import (
    MAX_LAT, MAX_LNG, MAX_NAME_LENGTH, MIN_LAT, MIN_LNG, MIN_PRICE,
)
from app.schemas.base import CamelModel, non_blank


SPOT_FIELD_MESSAGES: dict[str, str] = {
    "address": "Street address is required",
    "city": "City is required",
    "state": "State is required",
    "country": "Country is required",
    "lat": "Latitude must be within -90 and 90",
    "lng": "Longitude must be within -180 and 180",
    "name": "Name must be less than 50 characters",
    "description": "Description is required",
    "price": "Price per day must be a positive number",
    "url": "Image url is required",
}


class SpotBody(BaseModel):
    """Create/Edit body - every listing field is required on both."""
    address: str
    city: str
    state: str
    country: str
    lat: float = Field(ge=MIN_LAT, le=MAX_LAT, allow_inf_nan=False)
    lng: float = Field(ge=MIN_LNG, le=MAX_LNG, allow_inf_nan=False)
    name: str = Field(max_length=MAX_NAME_LENGTH)
    description: str
    price: float = Field(ge=MIN_PRICE, allow_inf_nan=False)

    @field_validator("address", "city", "state", "country", "name", "description")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return non_blank(v)


class SpotResponse(CamelModel):
    """Spot record as stored."""
    id: int
    owner_id: int
    address: str
    city: str
    state: str
    country: str
    lat: float
    lng: float
    name: str
    description: str
    price: float
    created_at: datetime
    updated_at: datetime


class SpotSummary(SpotResponse):
    avg_rating: float
    preview_image: str


class SpotList(BaseModel):
    Spots: list[SpotSummary]


class SpotImageResponse(CamelModel):
    id: int
    url: str
    preview: bool


class OwnerResponse(CamelModel):
    id: int
    first_name: str
    last_name: str


class SpotDetail(SpotResponse):
    num_reviews: int
    avg_star_rating: float | None
    spot_images: list[SpotImageResponse] = Field(alias="SpotImages")
    owner: OwnerResponse = Field(alias="Owner")


class SpotImageCreate(BaseModel):
    """Image attach body - nothing is rejected here.

    url and preview are interpreted by the route after the 401 -> 404 -> 403
    checks, so an odd body never outranks an auth or ownership failure.
    """
    url: Any = None
    preview: Any = False

    def image_url(self) -> str | None:
        """Submitted url as text, None when absent or blank."""
        if self.url is None:
            return None
        url = str(self.url).strip()
        return url or None

    def preview_flag(self) -> bool:
        """true, "true" (any case) and 1 mark a preview, anything else does not."""
        if isinstance(self.preview, str):
            return self.preview.strip().lower() == "true"
        return self.preview is True or self.preview == 1

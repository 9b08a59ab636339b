"""Review Schemas - review body and review listing shapes.

Invariants:
    - ReviewCreate.review is non-blank, stars is an integer in [1, 5]
    - ReviewDetail embeds reviewer identity (User) and ReviewImages
"""

from datetime import datetime

from pydantic import BaseModel, Field, StrictInt, field_validator

from app.core.domain_types import MAX_STARS, MIN_STARS
from app.schemas.base import CamelModel, non_blank
from app.schemas.spot import OwnerResponse


REVIEW_FIELD_MESSAGES: dict[str, str] = {
    "review": "Review text is required",
    "stars": "Stars must be an integer from 1 to 5",
}


class ReviewCreate(BaseModel):
    review: str
    stars: StrictInt = Field(ge=MIN_STARS, le=MAX_STARS)

    @field_validator("review")
    @classmethod
    def strip_review(cls, v: str) -> str:
        return non_blank(v)


class ReviewResponse(CamelModel):
    id: int
    user_id: int
    spot_id: int
    review: str
    stars: int
    created_at: datetime
    updated_at: datetime


class ReviewImageResponse(CamelModel):
    id: int
    url: str


class ReviewDetail(ReviewResponse):
    user: OwnerResponse = Field(alias="User")
    images: list[ReviewImageResponse] = Field(alias="ReviewImages")


class ReviewList(BaseModel):
    reviews: list[ReviewDetail]

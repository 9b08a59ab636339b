"""Review Routes - create and list reviews for a spot.

Invariants:
    - One review per (user, spot): a second review for the SAME spot is 409,
      reviews by the same user on other spots are unaffected
    - Create order: 422 -> 401 -> 404 -> 409
    - Listing includes reviewer identity (User) and ReviewImages

Design Decisions:
    - Check-then-insert backed by the uq_reviews_user_spot constraint: a
      concurrent duplicate surfaces as IntegrityError and maps to the same 409
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import get_current_user
from app.core.enforce_ownership import require_authenticated
from app.core.errors import (
    ErrorContext, ReviewAlreadyExistsError, SpotNotFoundError,
)
from app.infrastructure.database import get_db
from app.models.review import Review
from app.models.user import User
from app.schemas.review import (
    ReviewCreate, ReviewDetail, ReviewList, ReviewResponse,
)
from app.services.review_queries import (
    find_review_for_spot_by_user, list_reviews_for_spot,
)
from app.services.spot_queries import get_spot

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/spots/{spot_id}/reviews", tags=["reviews"])


@router.post(
    "", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED,
)
async def create_review(
    spot_id: int,
    body: ReviewCreate,
    user: User | None = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create the caller's review for a spot."""
    user = require_authenticated(user)
    spot = await get_spot(db, spot_id)
    if spot is None:
        raise SpotNotFoundError(spot_id)

    ctx = ErrorContext(user_id=user.id, spot_id=spot.id)
    if await find_review_for_spot_by_user(db, spot.id, user.id):
        raise ReviewAlreadyExistsError(ctx)

    review = Review(
        user_id=user.id, spot_id=spot.id,
        review=body.review, stars=body.stars,
    )
    db.add(review)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ReviewAlreadyExistsError(ctx)
    await db.refresh(review)
    logger.info(
        "Review created",
        extra={"user_id": user.id, "spot_id": spot.id, "review_id": review.id},
    )
    return ReviewResponse.model_validate(review)


@router.get("", response_model=ReviewList)
async def get_spot_reviews(spot_id: int, db: AsyncSession = Depends(get_db)):
    """All reviews for a spot with reviewer and review images."""
    if await get_spot(db, spot_id) is None:
        raise SpotNotFoundError(spot_id)
    reviews = await list_reviews_for_spot(db, spot_id)
    return ReviewList(
        reviews=[ReviewDetail.model_validate(r) for r in reviews],
    )

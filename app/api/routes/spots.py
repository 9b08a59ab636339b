"""Spot Routes - collection listing, current user's spots, detail, create, edit, delete.

Invariants:
    - /spots/current is registered before /spots/{spot_id}
    - Listing entries carry avgRating (0 when unreviewed) and previewImage
    - Mutations check 401 -> 404 -> 403 before touching the row
    - Validation errors (422) take precedence over 401 on create and edit
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import get_current_user
from app.core.enforce_ownership import check_spot_owner, require_authenticated
from app.core.errors import SpotNotFoundError
from app.core.spot_summary import summarize_spot
from app.infrastructure.database import get_db
from app.models.spot import Spot
from app.models.user import User
from app.schemas.base import MessageResponse
from app.schemas.spot import (
    SpotBody, SpotDetail, SpotList, SpotResponse, SpotSummary,
    OwnerResponse, SpotImageResponse,
)
from app.services.spot_queries import (
    fetch_spot_with_aggregates, get_spot, list_spots, list_spots_for_owner,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/spots", tags=["spots"])


def _to_spot_list(spots) -> SpotList:
    """Strip raw collections, add avgRating and previewImage."""
    return SpotList(Spots=[
        SpotSummary(**summarize_spot(
            SpotResponse.model_validate(spot).model_dump(),
            spot.images,
            spot.reviews,
        ))
        for spot in spots
    ])


@router.get("", response_model=SpotList)
async def get_all_spots(db: AsyncSession = Depends(get_db)):
    """All spots with avgRating and previewImage."""
    return _to_spot_list(await list_spots(db))


@router.get("/current", response_model=SpotList)
async def get_current_user_spots(
    user: User | None = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Spots owned by the authenticated user."""
    user = require_authenticated(user)
    return _to_spot_list(await list_spots_for_owner(db, user.id))


@router.get("/{spot_id}", response_model=SpotDetail)
async def get_spot_detail(spot_id: int, db: AsyncSession = Depends(get_db)):
    """Spot with numReviews, avgStarRating, SpotImages and Owner."""
    found = await fetch_spot_with_aggregates(db, spot_id)
    if found is None:
        raise SpotNotFoundError(spot_id)
    spot = found.spot
    return SpotDetail(
        **SpotResponse.model_validate(spot).model_dump(),
        num_reviews=found.num_reviews,
        avg_star_rating=found.avg_star_rating,
        spot_images=[SpotImageResponse.model_validate(i) for i in spot.images],
        owner=OwnerResponse.model_validate(spot.owner),
    )


@router.post(
    "", response_model=SpotResponse, status_code=status.HTTP_201_CREATED,
)
async def create_spot(
    body: SpotBody,
    user: User | None = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a spot owned by the current user."""
    user = require_authenticated(user)
    spot = Spot(owner_id=user.id, **body.model_dump())
    db.add(spot)
    await db.commit()
    await db.refresh(spot)
    logger.info(
        "Spot created", extra={"user_id": user.id, "spot_id": spot.id},
    )
    return SpotResponse.model_validate(spot)


async def _get_owned_spot(
    db: AsyncSession, spot_id: int, user: User | None,
) -> Spot:
    """401 -> 404 -> 403, then the spot."""
    require_authenticated(user)
    spot = await get_spot(db, spot_id)
    if spot is None:
        raise SpotNotFoundError(spot_id)
    check_spot_owner(user, spot)
    return spot


@router.put("/{spot_id}", response_model=SpotResponse)
async def edit_spot(
    spot_id: int,
    body: SpotBody,
    user: User | None = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Replace every listing field of an owned spot."""
    spot = await _get_owned_spot(db, spot_id, user)
    for field, value in body.model_dump().items():
        setattr(spot, field, value)
    await db.commit()
    await db.refresh(spot)
    logger.info("Spot updated", extra={"user_id": user.id, "spot_id": spot.id})
    return SpotResponse.model_validate(spot)


@router.delete("/{spot_id}", response_model=MessageResponse)
async def delete_spot(
    spot_id: int,
    user: User | None = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete an owned spot together with its images and reviews."""
    spot = await _get_owned_spot(db, spot_id, user)
    await db.delete(spot)
    await db.commit()
    logger.info("Spot deleted", extra={"user_id": user.id, "spot_id": spot_id})
    return MessageResponse(message="Successfully deleted")

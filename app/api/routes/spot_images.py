"""Spot Image Routes - attach an image to a spot, delete an image by id.

Invariants:
    - Only the spot's owner may attach or delete images (401 -> 404 -> 403)
    - Image deletion awaits BOTH the image and the parent spot lookup before branching
    - The body never outranks auth: url/preview are read after 401 -> 404 -> 403
    - url is stored as submitted (as text); a missing url is the only 422
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import get_current_user
from app.core.enforce_ownership import check_spot_owner, require_authenticated
from app.core.errors import SpotImageNotFoundError, SpotNotFoundError
from app.infrastructure.database import get_db
from app.models.spot_image import SpotImage
from app.models.user import User
from app.schemas.base import MessageResponse
from app.schemas.spot import SpotImageCreate, SpotImageResponse
from app.services.spot_queries import get_spot, get_spot_image

logger = logging.getLogger(__name__)
router = APIRouter(tags=["spot-images"])


@router.post(
    "/spots/{spot_id}/images",
    response_model=SpotImageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_spot_image(
    spot_id: int,
    body: SpotImageCreate | None = None,
    user: User | None = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Attach an image to an owned spot."""
    user = require_authenticated(user)
    spot = await get_spot(db, spot_id)
    if spot is None:
        raise SpotNotFoundError(spot_id)
    check_spot_owner(user, spot)

    body = body or SpotImageCreate()
    url = body.image_url()
    if url is None:
        raise RequestValidationError([{
            "loc": ("body", "url"), "msg": "Field required", "type": "missing",
        }])

    image = SpotImage(spot_id=spot.id, url=url, preview=body.preview_flag())
    db.add(image)
    await db.commit()
    await db.refresh(image)
    logger.info(
        "Spot image added",
        extra={"user_id": user.id, "spot_id": spot.id, "image_id": image.id},
    )
    return SpotImageResponse.model_validate(image)


@router.delete("/spot-images/{image_id}", response_model=MessageResponse)
async def delete_spot_image(
    image_id: int,
    user: User | None = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete an image whose parent spot the caller owns."""
    user = require_authenticated(user)
    image = await get_spot_image(db, image_id)
    if image is None:
        raise SpotImageNotFoundError(image_id)
    spot = await get_spot(db, image.spot_id)
    if spot is None:
        # Orphaned row: parent spot vanished between lookups
        raise SpotImageNotFoundError(image_id)
    check_spot_owner(user, spot)

    await db.delete(image)
    await db.commit()
    logger.info(
        "Spot image deleted",
        extra={"user_id": user.id, "spot_id": spot.id, "image_id": image_id},
    )
    return MessageResponse(message="Successfully deleted")

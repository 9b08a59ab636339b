"""Review Queries - duplicate check and per-spot listing.

Invariants:
    - find_review_for_spot_by_user is scoped by BOTH user_id and spot_id
    - list_reviews_for_spot eager-loads reviewer and review images
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.review import Review


async def find_review_for_spot_by_user(
    db: AsyncSession, spot_id: int, user_id: int,
) -> Review | None:
    result = await db.execute(
        select(Review)
        .where(Review.spot_id == spot_id)
        .where(Review.user_id == user_id),
    )
    return result.scalar_one_or_none()


async def list_reviews_for_spot(
    db: AsyncSession, spot_id: int,
) -> Sequence[Review]:
    result = await db.execute(
        select(Review).where(Review.spot_id == spot_id).order_by(Review.id),
    )
    return result.scalars().all()

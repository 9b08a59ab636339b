"""Spot Queries - point lookups, listings and the aggregate detail fetch.

Invariants:
    - get_spot / get_spot_image return None when the row is absent (never raise)
    - list_* return spots with images and reviews eager-loaded (selectin)
    - fetch_spot_with_aggregates computes COUNT/AVG in SQL; avg is None with no reviews

Design Decisions:
    - Correlated scalar subqueries for the aggregates: the Spot entity stays
      ungrouped so its selectin relationships load normally
"""

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.review import Review
from app.models.spot import Spot
from app.models.spot_image import SpotImage


@dataclass(frozen=True)
class SpotWithAggregates:
    spot: Spot
    num_reviews: int
    avg_star_rating: float | None


async def get_spot(db: AsyncSession, spot_id: int) -> Spot | None:
    return await db.get(Spot, spot_id)


async def list_spots(db: AsyncSession) -> Sequence[Spot]:
    """Every spot, oldest first. No pagination, no filtering."""
    result = await db.execute(select(Spot).order_by(Spot.id))
    return result.scalars().all()


async def list_spots_for_owner(
    db: AsyncSession, owner_id: int,
) -> Sequence[Spot]:
    result = await db.execute(
        select(Spot).where(Spot.owner_id == owner_id).order_by(Spot.id),
    )
    return result.scalars().all()


async def fetch_spot_with_aggregates(
    db: AsyncSession, spot_id: int,
) -> SpotWithAggregates | None:
    """Spot plus numReviews/avgStarRating, owner and images."""
    num_reviews = (
        select(func.count(Review.id))
        .where(Review.spot_id == Spot.id)
        .correlate(Spot)
        .scalar_subquery()
    )
    avg_stars = (
        select(func.avg(Review.stars))
        .where(Review.spot_id == Spot.id)
        .correlate(Spot)
        .scalar_subquery()
    )
    result = await db.execute(
        select(Spot, num_reviews, avg_stars).where(Spot.id == spot_id),
    )
    row = result.one_or_none()
    if row is None:
        return None
    spot, count, avg = row
    return SpotWithAggregates(
        spot=spot,
        num_reviews=count or 0,
        # Postgres AVG returns Decimal
        avg_star_rating=float(avg) if avg is not None else None,
    )


async def get_spot_image(
    db: AsyncSession, image_id: int,
) -> SpotImage | None:
    return await db.get(SpotImage, image_id)

"""Review ORM - a 1-5 star rating plus text, left by a User on a Spot.

Invariants:
    - At most one review per (user_id, spot_id): unique constraint backs the
      check-then-insert in api/routes/reviews.py
    - stars in [1, 5] (enforced by schemas/review.py)
    - Review images are deleted with the review
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Integer, Text, DateTime, ForeignKey, UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Review(Base):
    """Review entity - scoped to one spot and one reviewer."""
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "spot_id", name="uq_reviews_user_spot"),
        CheckConstraint("stars BETWEEN 1 AND 5", name="ck_reviews_stars_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    spot_id: Mapped[int] = mapped_column(
        ForeignKey("spots.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True,
    )
    review: Mapped[str] = mapped_column(Text, nullable=False)
    stars: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    spot: Mapped["Spot"] = relationship("Spot", back_populates="reviews")
    user: Mapped["User"] = relationship("User", lazy="selectin")
    images: Mapped[list["ReviewImage"]] = relationship(
        "ReviewImage", back_populates="review",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="ReviewImage.id",
    )

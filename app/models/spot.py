"""Spot ORM - a listable property owned by exactly one User.

Invariants:
    - owner_id is non-nullable (FK users.id)
    - lat in [-90, 90], lng in [-180, 180], price >= 0 (enforced by schemas/spot.py)
    - name is at most 50 characters; other text columns are unbounded so any
      body SpotBody accepts can be stored
    - images and reviews are deleted with the spot (ORM cascade + ON DELETE CASCADE)

Design Decisions:
    - price as Numeric(asdecimal=False): unbounded exact storage, float on the wire
    - images ordered by id so preview selection is deterministic ("last one wins")
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Float, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Spot(Base):
    """Listing aggregate root - owns its SpotImages and Reviews."""
    __tablename__ = "spots"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True,
    )
    address: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(Text, nullable=False)
    state: Mapped[str] = mapped_column(Text, nullable=False)
    country: Mapped[str] = mapped_column(Text, nullable=False)
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(
        Numeric(asdecimal=False), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", lazy="selectin")
    images: Mapped[list["SpotImage"]] = relationship(
        "SpotImage", back_populates="spot",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="SpotImage.id",
    )
    reviews: Mapped[list["Review"]] = relationship(
        "Review", back_populates="spot",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Review.id",
    )

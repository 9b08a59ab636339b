"""SpotImage ORM - an image URL attached to a Spot.

Invariants:
    - Always belongs to a Spot (spot_id FK, cascade on delete)
    - url is stored verbatim (no file storage, no URL validation, no length cap)
    - Nothing enforces a single preview=True image per spot
"""

from datetime import datetime, timezone

from sqlalchemy import Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class SpotImage(Base):
    __tablename__ = "spot_images"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    spot_id: Mapped[int] = mapped_column(
        ForeignKey("spots.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    preview: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    spot: Mapped["Spot"] = relationship("Spot", back_populates="images")

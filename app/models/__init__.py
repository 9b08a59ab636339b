"""ORM Models - SQLAlchemy declarative models for users, spots, images and reviews.

Invariants:
    - All models inherit from Base (db/base.py)
    - Spot is the aggregate root for SpotImage and Review

Design Decisions:
    - One file per entity
    - All models imported here so string-based relationship() references
      resolve before any query runs
"""

from app.models.user import User  # noqa: F401
from app.models.spot import Spot  # noqa: F401
from app.models.spot_image import SpotImage  # noqa: F401
from app.models.review import Review  # noqa: F401
from app.models.review_image import ReviewImage  # noqa: F401

"""Domain Types - bounds, constants and structural contracts shared by core and shell.

Invariants:
    - Geographic and price bounds defined once here (schemas import them)
    - Core functions accept Protocol types, never ORM classes

Design Decisions:
    - Protocol over ABC: ORM models satisfy the contracts structurally
"""

from typing import Protocol


# ─── Bounds ──────────────────────────────────────────────────────

MIN_LAT: float = -90.0
MAX_LAT: float = 90.0
MIN_LNG: float = -180.0
MAX_LNG: float = 180.0
MAX_NAME_LENGTH: int = 50
MIN_PRICE: float = 0.0
MIN_STARS: int = 1
MAX_STARS: int = 5

NO_PREVIEW_URL: str = "no preview url"


# ─── Structural contracts ────────────────────────────────────────

class UserLike(Protocol):
    id: int


class OwnedSpotLike(Protocol):
    id: int
    owner_id: int


class PreviewCandidate(Protocol):
    url: str
    preview: bool


class RatedLike(Protocol):
    stars: int

"""Ownership Enforcement - who may mutate a spot and its images.

Invariants:
    - Unauthenticated (user is None) is checked BEFORE ownership: 401 wins over 403
    - A mutation is allowed iff user.id == spot.owner_id
    - Pure: raises domain errors, never touches the database
"""

from app.core.domain_types import OwnedSpotLike, UserLike
from app.core.errors import (
    AuthenticationRequiredError, ErrorContext, ForbiddenError,
)


def require_authenticated(user: UserLike | None) -> UserLike:
    """Return the user, or raise 401 when the request carries none."""
    if user is None:
        raise AuthenticationRequiredError()
    return user


def is_owner(user: UserLike, spot: OwnedSpotLike) -> bool:
    return user.id == spot.owner_id


def check_spot_owner(user: UserLike | None, spot: OwnedSpotLike) -> None:
    """Raise 401 without a user, 403 when the user does not own the spot."""
    user = require_authenticated(user)
    if not is_owner(user, spot):
        raise ForbiddenError(ErrorContext(user_id=user.id, spot_id=spot.id))

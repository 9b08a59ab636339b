"""Authentication Seam - resolves the current user asserted by the upstream session layer.

Invariants:
    - get_current_user NEVER raises: absent, malformed or unknown ids yield None
    - Handlers receive the user as an explicit parameter and decide 401 themselves
    - Body validation (422) therefore runs before any 401 decision

Design Decisions:
    - Header name comes from settings (user_header, default X-User-Id)
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.infrastructure.database import get_db
from app.models.user import User

logger = logging.getLogger(__name__)


async def get_current_user(
    request: Request, db: AsyncSession = Depends(get_db),
) -> User | None:
    """FastAPI dependency: the authenticated User, or None."""
    raw = request.headers.get(get_settings().user_header)
    if not raw:
        return None
    try:
        user_id = int(raw)
    except ValueError:
        logger.warning("Malformed user header", extra={"path": request.url.path})
        return None
    user = await db.get(User, user_id)
    if user is None:
        logger.warning(
            "User header names unknown user",
            extra={"user_id": user_id, "path": request.url.path},
        )
    return user

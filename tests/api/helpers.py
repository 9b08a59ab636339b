"""Shared helpers for API tests."""

from sqlalchemy import select

from app.models.user import User


def auth(user: User) -> dict:
    """Headers the upstream session layer would attach for this user."""
    return {"X-User-Id": str(user.id)}


async def fetch_all(session_factory, model, *where):
    """Read rows through a fresh session (bypasses any stale identity map)."""
    async with session_factory() as session:
        stmt = select(model)
        if where:
            stmt = stmt.where(*where)
        result = await session.execute(stmt)
        return result.scalars().all()


SPOT_PAYLOAD = {
    "address": "1 Main St",
    "city": "X",
    "state": "Y",
    "country": "Z",
    "lat": 10,
    "lng": 20,
    "name": "Cabin",
    "description": "Nice",
    "price": 50,
}

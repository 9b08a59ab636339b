"""API test fixtures - async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched for code paths that bypass get_db (readiness probe)
    - Users are seeded directly; auth is the X-User-Id header

Design Decisions:
    - SQLite in-memory with StaticPool: all sessions share one connection
    - Assertions on DB state use a fresh session (no stale identity map)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.models.review import Review
from app.models.review_image import ReviewImage
from app.models.spot import Spot
from app.models.spot_image import SpotImage
from app.models.user import User
import app.infrastructure.database as db_module
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _add(db: AsyncSession, obj):
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


@pytest.fixture
async def owner(test_db):
    return await _add(test_db, User(
        first_name="Demo", last_name="Owner",
        email="owner@example.com", username="owner",
    ))


@pytest.fixture
async def other_user(test_db):
    return await _add(test_db, User(
        first_name="Guest", last_name="Reviewer",
        email="guest@example.com", username="guest",
    ))


@pytest.fixture
async def make_spot(test_db, owner):
    """Factory: insert a spot (owned by `owner` unless given)."""
    async def _make(owner_id: int | None = None, **fields) -> Spot:
        data = {
            "address": "1 Main St", "city": "Springfield", "state": "IL",
            "country": "USA", "lat": 39.78, "lng": -89.65,
            "name": "Cabin", "description": "Quiet cabin", "price": 120.0,
        }
        data.update(fields)
        return await _add(test_db, Spot(owner_id=owner_id or owner.id, **data))
    return _make


@pytest.fixture
async def seed_spot(make_spot):
    return await make_spot()


@pytest.fixture
async def add_image(test_db):
    async def _add_image(spot: Spot, url: str, preview: bool = False) -> SpotImage:
        return await _add(test_db, SpotImage(spot_id=spot.id, url=url, preview=preview))
    return _add_image


@pytest.fixture
async def add_review(test_db):
    async def _add_review(
        spot: Spot, user: User, stars: int, text: str = "Lovely stay",
        image_urls: tuple[str, ...] = (),
    ) -> Review:
        review = await _add(test_db, Review(
            spot_id=spot.id, user_id=user.id, review=text, stars=stars,
        ))
        for url in image_urls:
            await _add(test_db, ReviewImage(review_id=review.id, url=url))
        return review
    return _add_review

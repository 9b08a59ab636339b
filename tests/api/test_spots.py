"""Spot Collection & Mutation Routes - listing, current, create, edit, delete.

Tests cover:
    - avgRating is 0 with no reviews, exact mean otherwise
    - previewImage: last flagged url wins, literal fallback otherwise
    - /spots/current requires auth and is scoped to the caller
    - Create: 201 with id and ownerId, 422 before 401
    - Edit/Delete: 401 -> 404 -> 403 ordering, idempotent 404 on repeat delete
    - Delete cascades to images and reviews
"""

from app.models.review import Review
from app.models.spot import Spot
from app.models.spot_image import SpotImage
from tests.api.helpers import SPOT_PAYLOAD, auth, fetch_all


# ─── GET /spots ──────────────────────────────────────────────────

async def test_list_spots_empty(client):
    res = await client.get("/spots")
    assert res.status_code == 200
    assert res.json() == {"Spots": []}


async def test_list_spots_unreviewed_has_zero_avg_and_no_preview(client, seed_spot):
    res = await client.get("/spots")
    spot = res.json()["Spots"][0]
    assert spot["id"] == seed_spot.id
    assert spot["avgRating"] == 0
    assert spot["previewImage"] == "no preview url"


async def test_list_spots_avg_rating_is_exact_mean(
    client, seed_spot, owner, other_user, add_review,
):
    await add_review(seed_spot, owner, 5)
    await add_review(seed_spot, other_user, 2)
    res = await client.get("/spots")
    assert res.json()["Spots"][0]["avgRating"] == 3.5


async def test_list_spots_last_preview_image_wins(client, seed_spot, add_image):
    await add_image(seed_spot, "https://img/1.jpg", preview=True)
    await add_image(seed_spot, "https://img/2.jpg", preview=False)
    await add_image(seed_spot, "https://img/3.jpg", preview=True)
    res = await client.get("/spots")
    assert res.json()["Spots"][0]["previewImage"] == "https://img/3.jpg"


async def test_list_spots_unflagged_images_fall_back_to_literal(
    client, seed_spot, add_image,
):
    await add_image(seed_spot, "https://img/1.jpg", preview=False)
    res = await client.get("/spots")
    assert res.json()["Spots"][0]["previewImage"] == "no preview url"


async def test_list_spots_omits_raw_collections(
    client, seed_spot, owner, add_image, add_review,
):
    await add_image(seed_spot, "https://img/1.jpg", preview=True)
    await add_review(seed_spot, owner, 4)
    spot = (await client.get("/spots")).json()["Spots"][0]
    assert "SpotImages" not in spot
    assert "Reviews" not in spot
    assert spot["ownerId"] == seed_spot.owner_id
    assert spot["price"] == 120.0


# ─── GET /spots/current ──────────────────────────────────────────

async def test_current_spots_requires_auth(client, seed_spot):
    res = await client.get("/spots/current")
    assert res.status_code == 401
    assert res.json() == {"message": "Authentication required"}


async def test_current_spots_scoped_to_caller(
    client, owner, other_user, make_spot,
):
    mine = await make_spot(name="Mine")
    await make_spot(owner_id=other_user.id, name="Theirs")
    res = await client.get("/spots/current", headers=auth(owner))
    assert res.status_code == 200
    spots = res.json()["Spots"]
    assert [s["id"] for s in spots] == [mine.id]
    assert spots[0]["avgRating"] == 0


# ─── POST /spots ─────────────────────────────────────────────────

async def test_create_spot_returns_201_with_owner(client, owner):
    res = await client.post("/spots", json=SPOT_PAYLOAD, headers=auth(owner))
    assert res.status_code == 201
    body = res.json()
    assert isinstance(body["id"], int)
    assert body["ownerId"] == owner.id
    assert body["name"] == "Cabin"
    assert body["lat"] == 10
    assert "createdAt" in body and "updatedAt" in body


async def test_create_spot_unauthenticated_returns_401(client):
    res = await client.post("/spots", json=SPOT_PAYLOAD)
    assert res.status_code == 401


async def test_create_spot_validation_precedes_auth(client):
    res = await client.post("/spots", json={**SPOT_PAYLOAD, "lat": 91})
    assert res.status_code == 422
    assert res.json()["errors"] == {"lat": "Latitude must be within -90 and 90"}


async def test_create_spot_reports_each_invalid_field(client, owner):
    payload = {
        **SPOT_PAYLOAD,
        "address": "", "lng": -181, "name": "x" * 51, "price": -1,
    }
    res = await client.post("/spots", json=payload, headers=auth(owner))
    assert res.status_code == 422
    body = res.json()
    assert body["message"] == "Bad Request"
    assert body["errors"] == {
        "address": "Street address is required",
        "lng": "Longitude must be within -180 and 180",
        "name": "Name must be less than 50 characters",
        "price": "Price per day must be a positive number",
    }


async def test_create_spot_missing_fields(client, owner):
    res = await client.post("/spots", json={}, headers=auth(owner))
    assert res.status_code == 422
    errors = res.json()["errors"]
    assert errors["city"] == "City is required"
    assert errors["description"] == "Description is required"


async def test_create_spot_accepts_zero_price_and_equator(client, owner):
    payload = {**SPOT_PAYLOAD, "lat": 0, "lng": 0, "price": 0}
    res = await client.post("/spots", json=payload, headers=auth(owner))
    assert res.status_code == 201


# ─── PUT /spots/{id} ─────────────────────────────────────────────

async def test_edit_spot_updates_all_fields(client, owner, seed_spot):
    payload = {**SPOT_PAYLOAD, "name": "Renamed", "price": 75.5}
    res = await client.put(
        f"/spots/{seed_spot.id}", json=payload, headers=auth(owner),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == seed_spot.id
    assert body["name"] == "Renamed"
    assert body["price"] == 75.5
    assert body["city"] == "X"


async def test_edit_spot_unauthenticated_returns_401(client, seed_spot):
    res = await client.put(f"/spots/{seed_spot.id}", json=SPOT_PAYLOAD)
    assert res.status_code == 401


async def test_edit_spot_missing_returns_404(client, owner):
    res = await client.put("/spots/999", json=SPOT_PAYLOAD, headers=auth(owner))
    assert res.status_code == 404
    assert res.json() == {"message": "Spot couldn't be found"}


async def test_edit_spot_non_owner_returns_403(client, other_user, seed_spot):
    res = await client.put(
        f"/spots/{seed_spot.id}", json=SPOT_PAYLOAD, headers=auth(other_user),
    )
    assert res.status_code == 403
    assert res.json() == {"message": "Forbidden"}


async def test_edit_spot_invalid_body_returns_422(client, owner, seed_spot):
    res = await client.put(
        f"/spots/{seed_spot.id}",
        json={**SPOT_PAYLOAD, "description": "   "},
        headers=auth(owner),
    )
    assert res.status_code == 422
    assert res.json()["errors"] == {"description": "Description is required"}


# ─── DELETE /spots/{id} ──────────────────────────────────────────

async def test_delete_spot(client, owner, seed_spot, test_session_factory):
    res = await client.delete(f"/spots/{seed_spot.id}", headers=auth(owner))
    assert res.status_code == 200
    assert res.json() == {"message": "Successfully deleted"}
    assert await fetch_all(test_session_factory, Spot) == []


async def test_delete_spot_twice_returns_404(client, owner, seed_spot):
    await client.delete(f"/spots/{seed_spot.id}", headers=auth(owner))
    res = await client.delete(f"/spots/{seed_spot.id}", headers=auth(owner))
    assert res.status_code == 404


async def test_delete_spot_unauthenticated_checked_before_404(client):
    res = await client.delete("/spots/999")
    assert res.status_code == 401


async def test_delete_spot_non_owner_returns_403(
    client, other_user, seed_spot, test_session_factory,
):
    res = await client.delete(f"/spots/{seed_spot.id}", headers=auth(other_user))
    assert res.status_code == 403
    assert len(await fetch_all(test_session_factory, Spot)) == 1


async def test_delete_spot_cascades_images_and_reviews(
    client, owner, other_user, seed_spot, add_image, add_review,
    test_session_factory,
):
    await add_image(seed_spot, "https://img/1.jpg", preview=True)
    await add_review(seed_spot, other_user, 4, image_urls=("https://img/r.jpg",))
    res = await client.delete(f"/spots/{seed_spot.id}", headers=auth(owner))
    assert res.status_code == 200
    assert await fetch_all(test_session_factory, SpotImage) == []
    assert await fetch_all(test_session_factory, Review) == []


# ─── Boundary values ─────────────────────────────────────────────

async def test_create_spot_rejects_infinite_price(client, owner, test_session_factory):
    raw = (
        '{"address": "1 Main St", "city": "X", "state": "Y", "country": "Z",'
        ' "lat": 10, "lng": 20, "name": "Cabin", "description": "Nice",'
        ' "price": 1e400}'
    )
    res = await client.post(
        "/spots", content=raw,
        headers={**auth(owner), "Content-Type": "application/json"},
    )
    assert res.status_code == 422
    assert res.json()["errors"] == {
        "price": "Price per day must be a positive number",
    }
    assert await fetch_all(test_session_factory, Spot) == []


async def test_create_spot_rejects_infinite_coordinates(client, owner):
    raw = (
        '{"address": "1 Main St", "city": "X", "state": "Y", "country": "Z",'
        ' "lat": -1e400, "lng": 1e400, "name": "Cabin", "description": "Nice",'
        ' "price": 5}'
    )
    res = await client.post(
        "/spots", content=raw,
        headers={**auth(owner), "Content-Type": "application/json"},
    )
    assert res.status_code == 422
    assert set(res.json()["errors"]) == {"lat", "lng"}


async def test_create_spot_accepts_long_text_and_large_price(client, owner):
    payload = {
        **SPOT_PAYLOAD,
        "address": "a" * 300, "city": "c" * 150, "price": 1_000_000_000,
    }
    res = await client.post("/spots", json=payload, headers=auth(owner))
    assert res.status_code == 201
    body = res.json()
    assert body["address"] == "a" * 300
    assert body["price"] == 1_000_000_000


def test_spot_text_columns_are_unbounded():
    columns = Spot.__table__.c
    for name in ("address", "city", "state", "country", "description"):
        assert getattr(columns[name].type, "length", None) is None
    assert columns["price"].type.precision is None
    assert SpotImage.__table__.c["url"].type.length is None


async def test_malformed_spot_id_is_not_found(client, owner):
    res = await client.delete("/spots/abc", headers=auth(owner))
    assert res.status_code == 404
    assert res.json() == {"message": "Spot couldn't be found"}

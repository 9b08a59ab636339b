"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Responses serialize with camelCase aliases (ownerId, avgRating, ...)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""

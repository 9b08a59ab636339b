"""API Layer - FastAPI routes, auth seam and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON bodies; errors are {"message": ...}

Design Decisions:
    - Thin routes: queries in services/, derived fields and ownership in core/
"""

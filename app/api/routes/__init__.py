"""Route Modules - one file per resource.

Invariants:
    - Each module defines its own APIRouter with tags
    - Every handler does its own existence and ownership checks, in the order
      401 -> 404 -> 403

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""

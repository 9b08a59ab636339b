"""Services Layer - explicit typed query functions over the ORM.

Invariants:
    - One function per use case with a fixed return shape
    - Query functions never commit; routes own the unit of work
"""

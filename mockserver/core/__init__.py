"""Core Layer — route types, registry and status selection. No HTTP, no IO.

Invariants:
    - No module in core/ imports from api/, schemas/ or infrastructure/
    - Registry is the only stateful object; everything else is pure

Design Decisions:
    - Functional core separated from the FastAPI shell
"""

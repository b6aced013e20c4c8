"""Route Modules — one file per concern.

Invariants:
    - Each module defines its own APIRouter with tags
    - dynamic_dispatch.router must be included last: it matches every path

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""

"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routers registered explicitly in main.py, built-ins before the dynamic catch-all
    - Routes never contain registry logic (delegate to core/)
"""

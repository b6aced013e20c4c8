"""Mock HTTP Server Package — configurable echo/status/dynamic-route test server.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""

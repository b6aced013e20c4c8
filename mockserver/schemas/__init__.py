"""Pydantic Schemas — response shapes for the route management API.

Invariants:
    - Schemas describe what leaves the server; registration input is validated
      entry by entry in core.route_types so one bad entry never fails the batch

Design Decisions:
    - Separate from core types: schemas are API contracts, core types are the registry's values
"""

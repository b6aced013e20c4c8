"""Infrastructure Layer — logging setup and startup file loading.

Invariants:
    - Infrastructure performs IO on behalf of the app; core/ never does

Design Decisions:
    - File-level errors mapped to RoutesFileError before they leave this layer
"""

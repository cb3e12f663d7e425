"""Monthly Data API — per-user monthly numeric records behind a role-gated REST surface.

Invariants:
    - Package root contains no executable code (no import side effects)
"""

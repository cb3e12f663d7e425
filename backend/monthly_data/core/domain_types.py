"""Domain Types — identity types, month names and role values.

Invariants:
    - MONTHS lists the twelve month fields in calendar order
    - Roles are encoded as a str Enum, never raw string matching in handlers
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", UUID)
UserId = NewType("UserId", UUID)


# ─── Month Fields ────────────────────────────────────────────────

MONTHS: tuple[str, ...] = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Identity roles — only ADMIN may write monthly records."""
    ADMIN = "admin"
    USER = "user"

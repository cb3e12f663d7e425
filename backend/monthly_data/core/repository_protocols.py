"""Boundary Protocols — contracts between the request handlers and the record store.

Invariants:
    - Handlers depend on MonthlyRecordStore, never on SQLAlchemy directly
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


class CreatorLike(Protocol):
    """Display subset of the creating identity."""
    id: UUID
    username: str
    email: str


class RecordLike(Protocol):
    """Structural contract for monthly records passed between store and handlers."""
    id: UUID
    username: str
    mobile: str
    created_by_id: UUID
    created_by: CreatorLike | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class RecordFilter:
    """Equality filters for listing; None means unfiltered."""
    username: str | None = None
    mobile: str | None = None


class MonthlyRecordStore(Protocol):
    """Contract for monthly record persistence — implemented by the shell."""
    async def create(self, fields: dict) -> RecordLike: ...
    async def find_by_id(self, record_id: str | UUID) -> RecordLike | None: ...
    async def find_one(
        self, username: str, mobile: str, exclude_id: UUID | None = None,
    ) -> RecordLike | None: ...
    async def find(
        self, filters: RecordFilter, skip: int, limit: int,
    ) -> list[RecordLike]: ...
    async def count(self, filters: RecordFilter) -> int: ...
    async def update_by_id(self, record_id: UUID, fields: dict) -> RecordLike: ...
    async def delete_by_id(self, record_id: UUID) -> None: ...

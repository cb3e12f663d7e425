"""Monthly Record Store — SQLAlchemy adapter implementing MonthlyRecordStore.

Invariants:
    - Every read that returns records joins the creator (created_by) explicitly
    - Unique-constraint violations become DuplicateRecordError, never a raw IntegrityError
    - Any other SQLAlchemy failure is rolled back and raised as DatabaseError
    - Listing order: created_at desc, then id desc for equal timestamps

Design Decisions:
    - Constraint violations on commit map to the same 400 the handlers'
      pre-check produces, so a lost check-then-write race still answers 400
    - Malformed ids resolve to "not found" instead of a driver error
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from monthly_data.core.errors import (
    ANOTHER_RECORD_EXISTS, RECORD_EXISTS,
    DatabaseError, DuplicateRecordError, ResourceNotFoundError,
)
from monthly_data.core.repository_protocols import RecordFilter
from monthly_data.models.monthly_record import MonthlyRecord

logger = logging.getLogger(__name__)

UNIQUE_CONSTRAINT = "uq_monthly_records_username_mobile"


def _parse_id(record_id: str | UUID) -> UUID | None:
    if isinstance(record_id, UUID):
        return record_id
    try:
        return UUID(str(record_id))
    except ValueError:
        return None


def _is_pair_violation(exc: IntegrityError) -> bool:
    """Postgres names the constraint; SQLite names the columns."""
    detail = str(exc.orig)
    return (
        UNIQUE_CONSTRAINT in detail
        or "monthly_records.username, monthly_records.mobile" in detail
    )


def _apply_filters(query: Select, filters: RecordFilter) -> Select:
    if filters.username is not None:
        query = query.where(MonthlyRecord.username == filters.username)
    if filters.mobile is not None:
        query = query.where(MonthlyRecord.mobile == filters.mobile)
    return query


class SqlMonthlyRecordStore:
    """MonthlyRecordStore over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Monthly record {operation} failed: {e}")
            raise DatabaseError(str(e), operation) from e

    async def _commit(self, operation: str, duplicate_message: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if _is_pair_violation(e):
                raise DuplicateRecordError(duplicate_message) from e
            logger.error(f"Monthly record {operation} integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", operation) from e

    async def create(self, fields: dict) -> MonthlyRecord:
        """Insert a record; server assigns id and timestamps."""
        record = MonthlyRecord(**fields)
        async with self._guard("create"):
            self.db.add(record)
            await self._commit("create", RECORD_EXISTS)
        return await self._reload(record.id)

    async def find_by_id(self, record_id: str | UUID) -> MonthlyRecord | None:
        parsed = _parse_id(record_id)
        if parsed is None:
            return None
        query = (
            select(MonthlyRecord)
            .options(joinedload(MonthlyRecord.created_by))
            .where(MonthlyRecord.id == parsed)
            .execution_options(populate_existing=True)
        )
        async with self._guard("find_by_id"):
            result = await self.db.execute(query)
            return result.scalar_one_or_none()

    async def find_one(
        self, username: str, mobile: str, exclude_id: UUID | None = None,
    ) -> MonthlyRecord | None:
        """At most one record holding the pair, optionally ignoring one id."""
        query = (
            select(MonthlyRecord)
            .where(MonthlyRecord.username == username)
            .where(MonthlyRecord.mobile == mobile)
        )
        if exclude_id is not None:
            query = query.where(MonthlyRecord.id != exclude_id)
        async with self._guard("find_one"):
            result = await self.db.execute(query.limit(1))
            return result.scalars().first()

    async def find(
        self, filters: RecordFilter, skip: int, limit: int,
    ) -> list[MonthlyRecord]:
        query = _apply_filters(
            select(MonthlyRecord).options(joinedload(MonthlyRecord.created_by)),
            filters,
        )
        query = (
            query.order_by(MonthlyRecord.created_at.desc(), MonthlyRecord.id.desc())
            .offset(skip)
            .limit(limit)
        )
        async with self._guard("find"):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    async def count(self, filters: RecordFilter) -> int:
        query = _apply_filters(
            select(func.count()).select_from(MonthlyRecord), filters,
        )
        async with self._guard("count"):
            result = await self.db.execute(query)
            return result.scalar_one()

    async def update_by_id(self, record_id: UUID, fields: dict) -> MonthlyRecord:
        """Apply the given column values and persist."""
        async with self._guard("update"):
            record = await self.db.get(MonthlyRecord, record_id)
            if record is None:
                raise ResourceNotFoundError()
            for name, value in fields.items():
                setattr(record, name, value)
            await self._commit("update", ANOTHER_RECORD_EXISTS)
        return await self._reload(record_id)

    async def delete_by_id(self, record_id: UUID) -> None:
        async with self._guard("delete"):
            result = await self.db.execute(
                delete(MonthlyRecord).where(MonthlyRecord.id == record_id),
            )
            await self.db.commit()
        if result.rowcount == 0:
            raise ResourceNotFoundError()

    async def _reload(self, record_id: UUID) -> MonthlyRecord:
        record = await self.find_by_id(record_id)
        if record is None:
            raise ResourceNotFoundError()
        return record

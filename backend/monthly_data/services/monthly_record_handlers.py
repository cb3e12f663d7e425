"""Monthly Record Handlers — list, get, create, update and delete orchestration.

Invariants:
    - Payloads arrive already validated (MonthlyRecordWrite)
    - Create and update run the (username, mobile) pre-check before writing
    - Update touches username, mobile and only the month fields the caller sent
    - Not-found lookups raise ResourceNotFoundError (404); nothing is retried

Design Decisions:
    - Handlers depend on the MonthlyRecordStore protocol, so tests can swap
      the SQL adapter for a fake
    - Responses are plain dicts, rendered through schemas.render_record
"""

import logging
from uuid import UUID

from monthly_data.core.domain_types import MONTHS
from monthly_data.core.errors import (
    ANOTHER_RECORD_EXISTS, RECORD_EXISTS,
    DuplicateRecordError, ResourceNotFoundError,
)
from monthly_data.core.paginate import build_page_request, build_pagination
from monthly_data.core.repository_protocols import MonthlyRecordStore, RecordFilter
from monthly_data.schemas.monthly_record import MonthlyRecordWrite, render_record

logger = logging.getLogger(__name__)


class MonthlyRecordHandlers:
    """Request handlers for the monthly data resource."""

    def __init__(
        self, store: MonthlyRecordStore,
        default_limit: int = 10, max_limit: int = 100,
    ):
        self.store = store
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def list_records(
        self,
        page: str | None = None,
        limit: str | None = None,
        filters: RecordFilter | None = None,
    ) -> dict:
        """One page of records, newest first, plus pagination totals."""
        filters = filters or RecordFilter()
        request = build_page_request(
            page, limit, self.default_limit, self.max_limit,
        )
        records = (
            [] if request.out_of_range
            else await self.store.find(filters, request.skip, request.limit)
        )
        total = await self.store.count(filters)
        return {
            "data": [render_record(r) for r in records],
            "pagination": build_pagination(request, total),
        }

    async def get_record(self, record_id: str) -> dict:
        record = await self.store.find_by_id(record_id)
        if record is None:
            raise ResourceNotFoundError()
        return render_record(record)

    async def create_record(self, payload: MonthlyRecordWrite, actor_id: UUID) -> dict:
        """Persist a new record owned by actor_id; absent months become 0."""
        existing = await self.store.find_one(payload.username, payload.mobile)
        if existing is not None:
            raise DuplicateRecordError(RECORD_EXISTS)

        months = payload.provided_months()
        fields = {
            "username": payload.username,
            "mobile": payload.mobile,
            "created_by_id": actor_id,
            **{month: months.get(month, 0.0) for month in MONTHS},
        }
        record = await self.store.create(fields)
        logger.info(
            "Monthly record created",
            extra={"record_id": str(record.id), "user_id": str(actor_id)},
        )
        return {
            "message": "Monthly data created successfully",
            "data": render_record(record),
        }

    async def update_record(self, record_id: str, payload: MonthlyRecordWrite) -> dict:
        record = await self.store.find_by_id(record_id)
        if record is None:
            raise ResourceNotFoundError()

        other = await self.store.find_one(
            payload.username, payload.mobile, exclude_id=record.id,
        )
        if other is not None:
            raise DuplicateRecordError(ANOTHER_RECORD_EXISTS)

        fields = {
            "username": payload.username,
            "mobile": payload.mobile,
            **payload.provided_months(),
        }
        updated = await self.store.update_by_id(record.id, fields)
        logger.info(
            "Monthly record updated", extra={"record_id": str(record.id)},
        )
        return {
            "message": "Monthly data updated successfully",
            "data": render_record(updated),
        }

    async def delete_record(self, record_id: str) -> dict:
        record = await self.store.find_by_id(record_id)
        if record is None:
            raise ResourceNotFoundError()
        await self.store.delete_by_id(record.id)
        logger.info(
            "Monthly record deleted", extra={"record_id": str(record.id)},
        )
        return {"message": "Monthly data deleted successfully"}

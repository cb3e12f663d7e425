"""Monthly Data Routes — CRUD over monthly records.

Invariants:
    - Reads require an authenticated user; writes require an admin
    - Auth dependencies are resolved before the body, so 401/403 win over 400
    - A missing write body reports the same field errors as {}
    - page/limit are taken as raw strings and parsed leniently (never a 400)
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from monthly_data.api.dependencies import (
    get_current_user, get_record_handlers, get_record_payload, require_admin,
)
from monthly_data.core.repository_protocols import RecordFilter
from monthly_data.models.user import User
from monthly_data.schemas.monthly_record import MonthlyRecordWrite
from monthly_data.services.monthly_record_handlers import MonthlyRecordHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/data", tags=["monthly-data"])


@router.get("", dependencies=[Depends(get_current_user)])
async def list_monthly_data(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    username: str | None = Query(None),
    mobile: str | None = Query(None),
    handlers: MonthlyRecordHandlers = Depends(get_record_handlers),
):
    """List records newest first with pagination."""
    filters = RecordFilter(username=username, mobile=mobile)
    return await handlers.list_records(page, limit, filters)


@router.get("/{record_id}", dependencies=[Depends(get_current_user)])
async def get_monthly_data(
    record_id: str,
    handlers: MonthlyRecordHandlers = Depends(get_record_handlers),
):
    return await handlers.get_record(record_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_monthly_data(
    user: User = Depends(require_admin),
    body: MonthlyRecordWrite = Depends(get_record_payload),
    handlers: MonthlyRecordHandlers = Depends(get_record_handlers),
):
    """Create a record owned by the calling admin."""
    return await handlers.create_record(body, user.id)


@router.put("/{record_id}", dependencies=[Depends(require_admin)])
async def update_monthly_data(
    record_id: str,
    body: MonthlyRecordWrite = Depends(get_record_payload),
    handlers: MonthlyRecordHandlers = Depends(get_record_handlers),
):
    """Update username/mobile and any month fields present in the body."""
    return await handlers.update_record(record_id, body)


@router.delete("/{record_id}", dependencies=[Depends(require_admin)])
async def delete_monthly_data(
    record_id: str,
    handlers: MonthlyRecordHandlers = Depends(get_record_handlers),
):
    return await handlers.delete_record(record_id)

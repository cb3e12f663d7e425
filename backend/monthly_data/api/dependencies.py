"""Request Dependencies — identity resolution, admin gate and handler wiring.

Invariants:
    - get_current_user raises AuthenticationError (401) unless a valid bearer
      token names an existing user
    - require_admin raises PermissionDeniedError (403) for non-admin users
    - Both run before body validation, so a non-admin gets 403 whatever the payload
    - A missing write body is validated as {}, so every required field is reported
"""

import logging

from fastapi import Body, Depends, Header
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from monthly_data.config import Settings, get_settings
from monthly_data.core.errors import AuthenticationError, PermissionDeniedError
from monthly_data.infrastructure.auth_tokens import decode_access_token
from monthly_data.infrastructure.database import get_db
from monthly_data.infrastructure.monthly_record_store import SqlMonthlyRecordStore
from monthly_data.models.user import User
from monthly_data.schemas.monthly_record import MonthlyRecordWrite
from monthly_data.services.monthly_record_handlers import MonthlyRecordHandlers

logger = logging.getLogger(__name__)


def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise AuthenticationError("No token, authorization denied")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError()
    return parts[1].strip()


async def get_current_user(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """Resolve the caller from the Authorization header."""
    user_id = decode_access_token(_bearer_token(authorization), settings)
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise AuthenticationError()
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        logger.info(
            "Non-admin write attempt rejected", extra={"user_id": str(user.id)},
        )
        raise PermissionDeniedError()
    return user


def get_record_handlers(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MonthlyRecordHandlers:
    return MonthlyRecordHandlers(
        SqlMonthlyRecordStore(db),
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )


def get_record_payload(
    body: MonthlyRecordWrite | None = Body(None),
) -> MonthlyRecordWrite:
    """Write body for create/update; an absent body fails like an empty object."""
    if body is not None:
        return body
    try:
        return MonthlyRecordWrite.model_validate({})
    except ValidationError as exc:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in exc.errors()]
        ) from exc

"""Monthly Record Schemas — write payload validation and response rendering.

Invariants:
    - MonthlyRecordWrite reports one error per failed rule, all at once
    - username/mobile are validated even when absent (validate_default)
    - Month fields are None when absent, so "not provided" differs from 0
    - Responses serialize with camelCase keys createdBy/createdAt/updatedAt

Design Decisions:
    - PydanticCustomError keeps messages free of Pydantic's "Value error, " prefix
"""

from datetime import datetime
from uuid import UUID

from pydantic import (
    BaseModel, ConfigDict, Field, ValidationInfo, field_validator,
)
from pydantic_core import PydanticCustomError

from monthly_data.core.domain_types import MONTHS
from monthly_data.core.validate_record import (
    InvalidFieldError, check_username, check_mobile, coerce_month_value,
)


class MonthlyRecordWrite(BaseModel):
    """Create/update payload. Unknown keys are ignored."""
    username: str | None = Field(None, validate_default=True)
    mobile: str | None = Field(None, validate_default=True)
    jan: float | None = None
    feb: float | None = None
    mar: float | None = None
    apr: float | None = None
    may: float | None = None
    jun: float | None = None
    jul: float | None = None
    aug: float | None = None
    sep: float | None = None
    oct: float | None = None
    nov: float | None = None
    dec: float | None = None

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v: object) -> str:
        try:
            return check_username(v)
        except InvalidFieldError as e:
            raise PydanticCustomError(e.code, e.message) from None

    @field_validator("mobile", mode="before")
    @classmethod
    def validate_mobile(cls, v: object) -> str:
        try:
            return check_mobile(v)
        except InvalidFieldError as e:
            raise PydanticCustomError(e.code, e.message) from None

    @field_validator(*MONTHS, mode="before")
    @classmethod
    def validate_month(cls, v: object, info: ValidationInfo) -> float | None:
        try:
            return coerce_month_value(info.field_name, v)
        except InvalidFieldError as e:
            raise PydanticCustomError(e.code, e.message) from None

    def provided_months(self) -> dict[str, float]:
        """Month fields the caller actually sent (non-null)."""
        values = {month: getattr(self, month) for month in MONTHS}
        return {k: v for k, v in values.items() if v is not None}


class CreatorSummary(BaseModel):
    """Display subset of the creating user."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str


class MonthlyRecordResponse(BaseModel):
    """Public representation of a monthly record."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    mobile: str
    jan: float
    feb: float
    mar: float
    apr: float
    may: float
    jun: float
    jul: float
    aug: float
    sep: float
    oct: float
    nov: float
    dec: float
    created_by: CreatorSummary | None = Field(serialization_alias="createdBy")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


def render_record(record) -> dict:
    """Serialize an ORM record (creator loaded) into its JSON body."""
    return MonthlyRecordResponse.model_validate(record).model_dump(
        mode="json", by_alias=True,
    )

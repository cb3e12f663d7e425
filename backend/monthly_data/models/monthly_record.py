"""MonthlyRecord ORM — twelve month amounts keyed by (username, mobile).

Invariants:
    - (username, mobile) is unique: uq_monthly_records_username_mobile
    - Month columns are non-nullable and default to 0
    - created_by_id always references the creating user
    - created_at set on insert, updated_at refreshed on every update

Design Decisions:
    - created_by is lazy="raise": the store adapter loads the creator
      explicitly, so an accidental lazy load fails loudly instead of
      issuing IO inside an async context
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Float, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from monthly_data.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _month_column() -> Mapped[float]:
    return mapped_column(Float, nullable=False, default=0, server_default="0")


class MonthlyRecord(Base):
    """Monthly numeric record for one username/mobile pair."""
    __tablename__ = "monthly_records"
    __table_args__ = (
        UniqueConstraint(
            "username", "mobile", name="uq_monthly_records_username_mobile",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(Text, nullable=False)
    mobile: Mapped[str] = mapped_column(String(10), nullable=False)

    jan: Mapped[float] = _month_column()
    feb: Mapped[float] = _month_column()
    mar: Mapped[float] = _month_column()
    apr: Mapped[float] = _month_column()
    may: Mapped[float] = _month_column()
    jun: Mapped[float] = _month_column()
    jul: Mapped[float] = _month_column()
    aug: Mapped[float] = _month_column()
    sep: Mapped[float] = _month_column()
    oct: Mapped[float] = _month_column()
    nov: Mapped[float] = _month_column()
    dec: Mapped[float] = _month_column()

    created_by_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    created_by: Mapped["User"] = relationship("User", lazy="raise")

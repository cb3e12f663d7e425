"""API test fixtures — async in-memory DB, seeded users, and an httpx client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - admin_headers / user_headers carry real bearer tokens for seeded users

Design Decisions:
    - StaticPool: every session shares the single in-memory connection
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import monthly_data.models  # noqa: F401
from monthly_data.core.domain_types import Role
from monthly_data.db.base import Base
from monthly_data.infrastructure.auth_tokens import create_access_token
from monthly_data.infrastructure.database import get_db
from monthly_data.main import app
from monthly_data.models.monthly_record import MonthlyRecord
from monthly_data.models.user import User


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


async def _add_user(factory, username: str, role: Role) -> User:
    async with factory() as db:
        user = User(username=username, email=f"{username}@example.com", role=role.value)
        db.add(user)
        await db.commit()
        return user


@pytest.fixture
async def admin_user(test_session_factory):
    return await _add_user(test_session_factory, "root", Role.ADMIN)


@pytest.fixture
async def regular_user(test_session_factory):
    return await _add_user(test_session_factory, "viewer", Role.USER)


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token(admin_user.id)}"}


@pytest.fixture
def user_headers(regular_user):
    return {"Authorization": f"Bearer {create_access_token(regular_user.id)}"}


@pytest.fixture
def seed_records(test_session_factory, admin_user):
    """Insert n records with strictly increasing created_at; returns them oldest first."""
    async def _seed(n: int) -> list[MonthlyRecord]:
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        records = []
        async with test_session_factory() as db:
            for i in range(n):
                stamp = base + timedelta(minutes=i)
                record = MonthlyRecord(
                    username=f"user{i:02d}",
                    mobile=f"{9000000000 + i}",
                    jan=float(i),
                    created_by_id=admin_user.id,
                    created_at=stamp,
                    updated_at=stamp,
                )
                db.add(record)
                records.append(record)
            await db.commit()
        return records

    return _seed

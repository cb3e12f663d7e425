"""Error Responses — storage and unexpected failures surface as a generic 500.

Invariants:
    - DatabaseError → 500 {"message": "Server error"}, internal detail never returned
    - Unhandled exceptions → 500 {"message": "Server error"}
"""

from httpx import ASGITransport, AsyncClient

from monthly_data.api.dependencies import get_record_handlers
from monthly_data.core.errors import DatabaseError
from monthly_data.main import app
from monthly_data.services.monthly_record_handlers import MonthlyRecordHandlers

URL = "/api/v1/data"


class _FailingStore:
    def __init__(self, exc: Exception):
        self.exc = exc

    async def find(self, *args, **kwargs):
        raise self.exc

    async def count(self, *args, **kwargs):
        raise self.exc

    async def find_by_id(self, *args, **kwargs):
        raise self.exc


async def test_database_error_is_generic_500(client, user_headers):
    app.dependency_overrides[get_record_handlers] = lambda: MonthlyRecordHandlers(
        _FailingStore(DatabaseError("password authentication failed for db01", "find")),
    )
    res = await client.get(URL, headers=user_headers)
    assert res.status_code == 500
    assert res.json() == {"message": "Server error", "code": "DATABASE_ERROR"}
    assert "db01" not in res.text


async def test_unexpected_exception_is_generic_500(client, user_headers):
    app.dependency_overrides[get_record_handlers] = lambda: MonthlyRecordHandlers(
        _FailingStore(RuntimeError("boom")),
    )
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as raw_client:
        res = await raw_client.get(f"{URL}/anything", headers=user_headers)
    assert res.status_code == 500
    assert res.json() == {"message": "Server error", "code": "INTERNAL_ERROR"}
    assert "boom" not in res.text

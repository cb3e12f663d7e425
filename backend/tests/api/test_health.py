"""Health & Readiness Probes."""

from monthly_data.infrastructure.database import DatabaseSessionManager
from monthly_data.main import app


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_without_database_is_503(client):
    app.state.db_manager = None
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_with_database(client, test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    app.state.db_manager = manager
    try:
        res = await client.get("/api/v1/health/ready")
    finally:
        app.state.db_manager = None
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_session_manager_lifecycle():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    assert await manager.health_check() is True
    await manager.close()

"""Application Lifespan: manager wiring from settings, start on startup, stop on shutdown."""

from httpx import ASGITransport, AsyncClient

from user_api.config import Settings
from user_api.core.domain_types import ConnectionState
from user_api.main import app, build_connection_manager, lifespan


def test_build_connection_manager_uses_settings():
    settings = Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        db_retry_delay_seconds=1.5,
        db_retry_max_attempts=4,
        db_heartbeat_seconds=10,
    )
    manager = build_connection_manager(settings)

    assert manager.database_url == "sqlite+aiosqlite://"
    assert manager.retry_policy.delay_seconds == 1.5
    assert manager.retry_policy.max_attempts == 4
    assert manager.heartbeat_seconds == 10
    assert len(manager.bootstrap) == 1
    assert manager.state is ConnectionState.UNINITIALIZED


async def test_lifespan_starts_and_stops_connection_manager():
    async with lifespan(app):
        manager = app.state.db
        assert await manager.wait_until_ready(timeout=5)

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        ) as client:
            res = await client.get("/users")
            assert res.status_code == 200
            assert res.json() == []

    assert manager.state is ConnectionState.STOPPED
    del app.state.db

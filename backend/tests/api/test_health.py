"""Health & Readiness: liveness never depends on the database.

Invariants:
    - GET /health is 200 before, during and after database readiness
    - GET /health/ready mirrors the connection state (503 until READY)
    - Requests that need the database fail with 500 while it is starting
"""

from user_api.core.domain_types import ConnectionState


async def test_health_returns_200_when_database_ready(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "Backend is running!"}


async def test_health_returns_200_before_database_is_ready(
    pending_client, pending_db,
):
    assert pending_db.state is ConnectionState.CONNECTING

    res = await pending_client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "Backend is running!"}


async def test_readiness_503_while_connecting(pending_client):
    res = await pending_client.get("/health/ready")
    assert res.status_code == 503
    assert res.json() == {"status": "not_ready", "database": "connecting"}


async def test_readiness_200_when_ready(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json() == {"status": "ready", "database": "ready"}


async def test_data_requests_fail_with_500_while_connecting(pending_client):
    res = await pending_client.get("/users")
    assert res.status_code == 500
    assert res.json() == {
        "error": "Database connection is not ready (state: connecting)",
    }


async def test_validation_still_400_while_connecting(pending_client):
    res = await pending_client.post("/add-user", json={"name": "Aryan"})
    assert res.status_code == 400

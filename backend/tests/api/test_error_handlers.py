"""Error Handlers: log level follows the error's severity."""

import logging

import pytest
from sqlalchemy import text

HANDLER_LOGGER = "user_api.api.error_handlers"


def _handler_records(caplog) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == HANDLER_LOGGER]


@pytest.fixture(autouse=True)
def _capture_handler_logs(caplog):
    caplog.set_level(logging.DEBUG, logger=HANDLER_LOGGER)


async def test_missing_fields_logged_at_warning(client, caplog):
    res = await client.post("/add-user", json={"name": "Aryan"})

    assert res.status_code == 400
    [record] = _handler_records(caplog)
    assert record.levelno == logging.WARNING
    assert record.error_code == "VALIDATION_ERROR"


async def test_not_found_logged_at_warning(client, caplog):
    res = await client.delete("/delete-user/999")

    assert res.status_code == 404
    [record] = _handler_records(caplog)
    assert record.levelno == logging.WARNING
    assert record.error_code == "RESOURCE_NOT_FOUND"
    assert record.path == "/delete-user/999"


async def test_database_error_logged_at_critical(client, db, caplog):
    await db.execute(text("DROP TABLE users"))

    res = await client.get("/users")

    assert res.status_code == 500
    [record] = _handler_records(caplog)
    assert record.levelno == logging.CRITICAL
    assert record.error_code == "DATABASE_ERROR"

"""Infrastructure test fixtures: fake clock and controllable engine factories.

Invariants:
    - No test waits on real retry delays: FakeClock records and yields only
    - Engines are in-memory SQLite; "unreachable" is simulated by the factory
"""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

SQLITE_URL = "sqlite+aiosqlite://"


class FakeClock:
    """Async sleep replacement that records requested delays."""

    def __init__(self):
        self.sleeps: list[float] = []

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        await asyncio.sleep(0)


class FlakyEngineFactory:
    """create_async_engine stand-in that refuses the first `failures` connects."""

    def __init__(self, failures: int = 0):
        self.failures = failures
        self.calls = 0
        self.options: list[dict] = []

    def __call__(self, url, **options):
        self.calls += 1
        self.options.append(options)
        if self.calls <= self.failures:
            raise ConnectionRefusedError(111, "Connection refused")
        return create_async_engine(url, **options)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def flaky_factory():
    return FlakyEngineFactory

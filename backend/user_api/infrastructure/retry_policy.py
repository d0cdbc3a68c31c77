"""Retry Policy: fixed-delay reconnection schedule for the connection supervisor.

Invariants:
    - Delay is constant between attempts (no exponential growth, no jitter)
    - max_attempts=None retries forever; otherwise at most max_attempts connects
    - sleep is injectable so tests run without real waits
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

Sleep = Callable[[float], Awaitable[None]]

DEFAULT_RETRY_DELAY_SECONDS = 5.0


@dataclass(frozen=True)
class RetryPolicy:
    """How long to wait between connection attempts and when to give up."""

    delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS
    max_attempts: int | None = None
    sleep: Sleep = asyncio.sleep

    def __post_init__(self):
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1 or None")

    @property
    def is_unbounded(self) -> bool:
        return self.max_attempts is None

    def should_retry(self, attempts_made: int) -> bool:
        """True if another attempt is allowed after `attempts_made` failures."""
        return self.is_unbounded or attempts_made < self.max_attempts

    async def wait(self) -> None:
        await self.sleep(self.delay_seconds)

"""Connection Manager: one logical database connection with a supervised reconnect loop.

Invariants:
    - Exactly one engine (pool of one connection) exists while READY
    - start() never blocks: the HTTP listener serves before the first connect
    - Statements run only in READY; otherwise DatabaseError, never a hang
    - Bootstrap statements (create-if-absent DDL) run after every successful connect
    - A disconnect seen by execute() or the heartbeat moves READY -> LOST and
      wakes the supervisor, which reconnects from scratch
    - All SQLAlchemy/driver exceptions leave this module as DatabaseError

Design Decisions:
    - Supervisor is a single asyncio task owning the connect/retry loop; handlers
      only read the state cell and call execute()
    - pool_size=1, max_overflow=0: concurrent statements queue on pool checkout
      instead of opening more connections
    - Manager instance lives on app.state and reaches routes via Depends
      (get_connection_manager), so tests swap it without touching globals
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.sql import Executable

from user_api.core.domain_types import ConnectionState
from user_api.core.errors import DatabaseError
from user_api.infrastructure.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)

EngineFactory = Callable[..., AsyncEngine]


@dataclass(frozen=True)
class StatementResult:
    """Outcome of one statement: rows for reads, counts and ids for writes."""
    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0
    inserted_id: int | None = None


def _engine_options(database_url: URL | str) -> dict:
    """Pool options per backend. SQLite keeps the dialect's default pool."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": 1,
        "max_overflow": 0,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


def _driver_message(exc: SQLAlchemyError) -> str:
    """Raw driver text, without SQLAlchemy's statement/background decoration."""
    orig = getattr(exc, "orig", None)
    if orig is None:
        return str(exc)
    # MySQL drivers use (errno, message) args
    if len(orig.args) == 2 and isinstance(orig.args[1], str):
        return orig.args[1]
    return str(orig)


def _to_statement_result(result) -> StatementResult:
    if result.returns_rows:
        rows = [dict(row) for row in result.mappings().all()]
        return StatementResult(rows=rows, rowcount=len(rows))
    inserted_id = None
    if result.is_insert:
        pk = result.inserted_primary_key
        inserted_id = pk[0] if pk else result.lastrowid
    return StatementResult(rowcount=result.rowcount, inserted_id=inserted_id)


class ConnectionManager:
    """Owns the database connection lifecycle and executes statements on it."""

    def __init__(
        self,
        database_url: URL | str,
        retry_policy: RetryPolicy | None = None,
        bootstrap: Sequence[Executable] = (),
        heartbeat_seconds: float | None = None,
        engine_factory: EngineFactory = create_async_engine,
    ):
        self.database_url = database_url
        self.retry_policy = retry_policy or RetryPolicy()
        self.bootstrap = list(bootstrap)
        self.heartbeat_seconds = heartbeat_seconds
        self._engine_factory = engine_factory
        self._engine: AsyncEngine | None = None
        self._state = ConnectionState.UNINITIALIZED
        self._ready = asyncio.Event()
        self._lost = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ConnectionState.READY

    def _set_state(self, state: ConnectionState) -> None:
        if state is not self._state:
            logger.debug(
                f"Database state {self._state.value} -> {state.value}",
                extra={"db_state": state.value},
            )
        self._state = state
        if state is ConnectionState.READY:
            self._ready.set()
        else:
            self._ready.clear()

    # ─── Lifecycle ───────────────────────────────────────────────

    def start(self) -> None:
        """Spawn the supervisor task. No-op if it is already running."""
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.create_task(
            self._supervise(), name="db-connection-supervisor",
        )

    async def stop(self) -> None:
        """Cancel the supervisor and release the connection."""
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        await self._dispose_engine()
        self._set_state(ConnectionState.STOPPED)

    async def wait_until_ready(self, timeout: float | None = None) -> bool:
        """Wait for READY. Returns False if `timeout` elapses first."""
        try:
            await asyncio.wait_for(self._ready.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    def mark_lost(self, reason: str) -> None:
        """Report a dropped connection; the supervisor reconnects."""
        if self._state is not ConnectionState.READY:
            return
        logger.warning(
            f"Database connection lost: {reason}",
            extra={"db_state": ConnectionState.LOST.value},
        )
        self._set_state(ConnectionState.LOST)
        self._lost.set()

    async def _supervise(self) -> None:
        while True:
            if not await self._connect_with_retry():
                self._set_state(ConnectionState.FAILED)
                return
            await self._watch()
            await self._dispose_engine()
            logger.info("Reconnecting to database")

    async def _connect_with_retry(self) -> bool:
        attempt = 0
        while True:
            attempt += 1
            self._set_state(ConnectionState.CONNECTING)
            try:
                await self._open()
            except Exception as e:
                await self._dispose_engine()
                if not self.retry_policy.should_retry(attempt):
                    logger.error(
                        f"Database unreachable after {attempt} attempt(s), giving up: {e}",
                        extra={"attempt": attempt},
                    )
                    return False
                logger.warning(
                    f"Database not ready, retrying in "
                    f"{self.retry_policy.delay_seconds:g} seconds: {e}",
                    extra={
                        "attempt": attempt,
                        "delay_seconds": self.retry_policy.delay_seconds,
                    },
                )
                await self.retry_policy.wait()
                continue
            logger.info("Connected to database", extra={"attempt": attempt})
            await self._run_bootstrap()
            self._lost.clear()
            self._set_state(ConnectionState.READY)
            return True

    async def _open(self) -> None:
        self._engine = self._engine_factory(
            self.database_url, **_engine_options(self.database_url),
        )
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def _run_bootstrap(self) -> None:
        for statement in self.bootstrap:
            try:
                await self._run(statement)
            except DatabaseError as e:
                logger.error(
                    f"Bootstrap statement failed: {e.message}",
                    extra={"error_code": e.code},
                )
                return
        if self.bootstrap:
            logger.info("Database schema is ready")

    async def _watch(self) -> None:
        """Return once the connection is reported lost."""
        while True:
            if self.heartbeat_seconds is None:
                await self._lost.wait()
                return
            try:
                await asyncio.wait_for(
                    self._lost.wait(), timeout=self.heartbeat_seconds,
                )
                return
            except asyncio.TimeoutError:
                if not await self.ping():
                    self.mark_lost("heartbeat failed")
                    return

    async def _dispose_engine(self) -> None:
        engine, self._engine = self._engine, None
        if engine is not None:
            await engine.dispose()

    # ─── Statements ──────────────────────────────────────────────

    async def ping(self) -> bool:
        """Round-trip SELECT 1 on the current connection."""
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    async def execute(self, statement: Executable) -> StatementResult:
        """Run one parameterized statement in its own transaction."""
        if not self.is_ready or self._engine is None:
            raise DatabaseError(
                f"Database connection is not ready (state: {self._state.value})",
                "connect",
            )
        return await self._run(statement)

    async def _run(self, statement: Executable) -> StatementResult:
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(statement)
                return _to_statement_result(result)
        except DBAPIError as e:
            if e.connection_invalidated:
                self.mark_lost(_driver_message(e))
            logger.error(
                f"DB driver error: {_driver_message(e)}",
                extra={"operation": "execute"},
            )
            raise DatabaseError(_driver_message(e), "execute") from e
        except SQLAlchemyError as e:
            logger.error(f"SQLAlchemy error: {e}", extra={"operation": "execute"})
            raise DatabaseError(_driver_message(e), "execute") from e


def get_connection_manager(request: Request) -> ConnectionManager:
    """FastAPI dependency for the shared connection manager."""
    manager = getattr(request.app.state, "db", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager

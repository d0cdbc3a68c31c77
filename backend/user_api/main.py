"""Users API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserApiError → {"error": message} responses
    - CORS open to any origin by default (configured from settings)
    - Connection supervisor started in lifespan without awaiting the first
      connect: the listener serves /health while the database is still down

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - ConnectionManager stored on app.state, injected via get_connection_manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_api.api.error_handlers import register_error_handlers
from user_api.api.routes import health, users
from user_api.config import Settings, get_settings
from user_api.infrastructure.database import ConnectionManager
from user_api.infrastructure.observability import setup_logging
from user_api.infrastructure.retry_policy import RetryPolicy
from user_api.models.user import create_users_table

logger = logging.getLogger(__name__)


def build_connection_manager(settings: Settings) -> ConnectionManager:
    """Connection manager wired from settings, bootstrapping the users table."""
    return ConnectionManager(
        settings.sqlalchemy_url,
        retry_policy=RetryPolicy(
            delay_seconds=settings.db_retry_delay_seconds,
            max_attempts=settings.db_retry_max_attempts,
        ),
        bootstrap=[create_users_table()],
        heartbeat_seconds=settings.db_heartbeat_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = build_connection_manager(settings)
    app.state.db = manager
    manager.start()
    logger.info(f"Users API listening on port {settings.api_port}")
    yield
    await manager.stop()
    logger.info("Users API shutting down")


app = FastAPI(title="Users API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)

register_error_handlers(app)

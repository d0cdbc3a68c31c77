"""Structured Logging: JSON formatter and setup for container log collection.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (attempt, db_state, error_code, ...) surfaced when present
    - setup_logging is idempotent: repeated calls replace, never stack, handlers

Design Decisions:
    - JSON format by default (container stdout is scraped), text for local runs
    - setup_logging called once on startup via lifespan
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "attempt", "delay_seconds", "db_state", "error_code",
    "operation", "path", "user_id",
)


class JSONFormatter(logging.Formatter):
    """Format logs as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class _UserApiHandler(logging.StreamHandler):
    """Marker type so setup_logging can find its own handler again."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure root logging for the application."""
    handler = _UserApiHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if isinstance(existing, _UserApiHandler):
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))

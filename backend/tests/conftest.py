"""Root conftest: shared test configuration."""

import os

# Ensure tests never reach for a real MySQL server
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_FORMAT", "text")

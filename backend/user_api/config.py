"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default: the service starts with no environment at all
    - get_settings() is cached (lru_cache): read once per process
    - DATABASE_URL, when set, wins over the DB_* parts

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults target a database container in the same pod (localhost:3306)
    - URL.create over string formatting: passwords with '@' or '/' stay intact
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = "rootpass"
    db_name: str = "mydb"
    db_driver: str = "mysql+aiomysql"
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_mysql_url(cls, v: str | None) -> str | None:
        """mysql:// URLs get the async driver; an empty value means unset."""
        if isinstance(v, str):
            if not v:
                return None
            if v.startswith("mysql://"):
                return v.replace("mysql://", "mysql+aiomysql://", 1)
        return v

    # Connection lifecycle
    db_retry_delay_seconds: float = 5.0
    db_retry_max_attempts: int | None = None
    db_heartbeat_seconds: float | None = None

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def sqlalchemy_url(self) -> URL | str:
        """Async SQLAlchemy URL for the configured database."""
        if self.database_url:
            return self.database_url
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()

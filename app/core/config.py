"""
Application configuration module.

Loads settings from environment variables (or .env file) using pydantic-settings.
All sensitive values (DB credentials) come from environment — never hardcoded.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the Venture Portfolio API.

    Environment variables are loaded automatically from .env if present.
    In production, these should be injected via the container orchestrator.
    """

    PROJECT_NAME: str = "Venture Portfolio API"
    API_V1_STR: str = "/api/v1"

    # ── SQLite mode (no external DB required) ──
    USE_SQLITE: bool = False

    # ── PostgreSQL connection parameters ──
    # Empty defaults keep USE_SQLITE=true usable without dummy PG vars; the
    # validator below still fails fast when PostgreSQL mode is selected.
    POSTGRES_USER: str = ""
    POSTGRES_PASSWORD: str = ""
    POSTGRES_SERVER: str = ""
    POSTGRES_DB: str = ""
    POSTGRES_PORT: int = 5432

    @model_validator(mode="after")
    def _require_pg_credentials_unless_sqlite(self) -> "Settings":
        """Fail fast if PostgreSQL credentials are missing in production mode."""
        if not self.USE_SQLITE:
            missing = [
                name
                for name in (
                    "POSTGRES_USER",
                    "POSTGRES_PASSWORD",
                    "POSTGRES_SERVER",
                    "POSTGRES_DB",
                )
                if not getattr(self, name)
            ]
            if missing:
                vars_list = ", ".join(missing)
                raise ValueError(
                    f"PostgreSQL mode requires these environment variables: "
                    f"{vars_list}.\n\n"
                    f"Set them in a .env file or export them before starting:\n"
                    f"       export POSTGRES_USER=portfolio_user\n"
                    f"       export POSTGRES_PASSWORD=portfolio_password\n"
                    f"       export POSTGRES_SERVER=127.0.0.1\n"
                    f"       export POSTGRES_DB=portfolio_db\n\n"
                    f"Or skip PostgreSQL entirely (in-memory SQLite):\n"
                    f"       USE_SQLITE=true uvicorn app.main:app"
                )
        return self

    # ── Connection pool tuning ──
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for a connection from the pool
    DB_POOL_RECYCLE: int = 1800  # seconds before a connection is recycled
    DB_CONNECT_RETRIES: int = 5  # startup attempts before entering degraded mode

    # ── CORS ──
    # Comma-separated list of allowed origins. "*" in dev, restrict in prod.
    CORS_ORIGINS: str = "*"

    # ── Logging ──
    LOG_LEVEL: str = "INFO"
    LOG_FILE_MAX_BYTES: int = 10 * 1024 * 1024
    LOG_FILE_BACKUP_COUNT: int = 5

    # ── Cache ──
    CACHE_ENABLED: bool = True
    CACHE_TTL: float = 30.0
    CACHE_MAX_SIZE: int = 1000

    # ── Circuit breaker ──
    CB_FAILURE_THRESHOLD: int = 5
    CB_RECOVERY_TIMEOUT: float = 30.0

    # ── Investor sharing ──
    # Base URL of the front-end that renders /investor-view/{shareToken}.
    PUBLIC_BASE_URL: str = "http://localhost:3000"
    VENTURE_TEMPLATE_PATH: str = "VENTURE_TEMPLATE.md"

    # ── Misc ──
    DEBUG: bool = False

    @property
    def DATABASE_URL(self) -> str:
        """Construct the async database DSN.

        Returns an in-memory SQLite URL when ``USE_SQLITE`` is enabled,
        otherwise a PostgreSQL DSN for asyncpg.
        """
        if self.USE_SQLITE:
            return "sqlite+aiosqlite://"
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()

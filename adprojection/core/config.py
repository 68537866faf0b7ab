"""Application configuration using Pydantic settings."""

from typing import Any, Self

from pydantic import PostgresDsn, RedisDsn, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Ad Revenue Projection API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = False

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "adprojection"
    DATABASE_URL: PostgresDsn | None = None

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: str | None, info: Any) -> str:
        """Build database URL from components if not provided."""
        if isinstance(v, str):
            return v

        data = info.data
        return str(
            PostgresDsn.build(
                scheme="postgresql+asyncpg",
                username=data.get("POSTGRES_USER"),
                password=data.get("POSTGRES_PASSWORD"),
                host=data.get("POSTGRES_SERVER"),
                port=data.get("POSTGRES_PORT"),
                path=f"{data.get('POSTGRES_DB') or ''}",
            ),
        )

    # Redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str | None = None
    REDIS_URL: RedisDsn | None = None
    # Runs hold no connection between lock acquire and release, so the pool
    # only needs one slot per concurrent lock command plus health pings
    REDIS_MAX_CONNECTIONS: int = 10
    REDIS_SOCKET_TIMEOUT: float = 2.0

    @field_validator("REDIS_URL", mode="before")
    @classmethod
    def assemble_redis_connection(cls, v: str | None, info: Any) -> str:
        """Build Redis URL from components if not provided."""
        if isinstance(v, str):
            return v

        data = info.data
        password_part = f":{data.get('REDIS_PASSWORD')}@" if data.get("REDIS_PASSWORD") else ""
        return f"redis://{password_part}{data.get('REDIS_HOST')}:{data.get('REDIS_PORT')}/{data.get('REDIS_DB')}"

    # CORS
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",  # Local development
        "http://localhost:8000",
    ]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: list[str] = ["*"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 30  # Projection runs per client per minute

    # Projection engine
    DEFAULT_PROJECTION_MONTHS: int = 12
    MAX_PROJECTION_MONTHS: int = 360  # 30-year horizon
    SHARE_SUM_TOLERANCE: float = 0.001  # Allowed drift of preroll+midroll+postroll from 1.0
    PROJECTION_LOCK_TTL_SECONDS: int = 60  # Per-scenario run lock expiry
    BASELINE_LOOKBACK_DAYS: int = 30  # Window of actual revenue logged alongside a run

    # Monitoring
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str = "development"
    SENTRY_TRACES_SAMPLE_RATE: float = 1.0

    @model_validator(mode="after")
    def validate_projection_limits(self) -> Self:
        """Reject horizon settings the engine cannot honour."""
        if self.MAX_PROJECTION_MONTHS < 1:
            raise ValueError("MAX_PROJECTION_MONTHS must be at least 1")

        if not 1 <= self.DEFAULT_PROJECTION_MONTHS <= self.MAX_PROJECTION_MONTHS:
            raise ValueError(
                "DEFAULT_PROJECTION_MONTHS must be between 1 and MAX_PROJECTION_MONTHS"
            )

        if self.SHARE_SUM_TOLERANCE < 0:
            raise ValueError("SHARE_SUM_TOLERANCE cannot be negative")

        # A stalled release must give up before the lock would expire anyway
        if self.REDIS_SOCKET_TIMEOUT >= self.PROJECTION_LOCK_TTL_SECONDS:
            raise ValueError("REDIS_SOCKET_TIMEOUT must be shorter than PROJECTION_LOCK_TTL_SECONDS")

        return self


settings = Settings()

"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except secret_key, validated in
    validate_required.
    """

    # App
    app_name: str = "geolab"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (Postgres via SQLAlchemy + asyncpg)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Identity tokens
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:5173,http://localhost:3000"

    # Access control: strict mode surfaces directory failures instead of
    # degrading to the home organization only.
    access_strict_mode: bool = False

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Redis cache (organization records). Off by default; organization
    # mutations invalidate the affected keys when it is on.
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    organization_cache_enabled: bool = False
    cache_ttl_organizations: int = 60

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env values and supported algorithms."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.algorithm not in {"HS256"}:
            raise ValueError(
                f"Unsupported algorithm={self.algorithm!r}. Allowed: HS256"
            )
        if self.organization_cache_enabled and not self.redis_enabled:
            raise ValueError(
                "ORGANIZATION_CACHE_ENABLED requires REDIS_ENABLED=true."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()

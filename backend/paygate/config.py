"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): one instance per process
    - Downstream endpoints are base URLs without a trailing slash

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://paygate:paygate@db:5432/paygate"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # ACH file service
    ach_endpoint: str = "http://localhost:8080"
    ach_timeout_seconds: float = 30.0
    ach_max_retries: int = 3
    ach_base_delay_ms: int = 200
    ach_max_delay_ms: int = 5_000

    # Ledger
    ledger_endpoint: str = "http://localhost:7000"
    ledger_auth_token: str = ""
    ledger_enabled: bool = True
    ledger_timeout_seconds: float = 10.0

    @field_validator("ach_endpoint", "ledger_endpoint", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Transfers
    idempotency_ttl_seconds: int = 3600
    company_identification: str = "121042882"
    default_company_name: str = "Paygate payment"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""SDK Settings — environment-driven defaults via pydantic-settings.

Invariants:
    - Secrets come from environment variables or .env (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Only RCSClient.from_settings() and logging setup read these; the core takes
      an explicit SDKConfig

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - RCS_ prefix keeps the SDK's variables apart from the host application's
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from rcs_sdk import __version__


class Settings(BaseSettings):
    """SDK settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RCS_", env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Provider selection
    provider: str = "longears"
    auth_type: str = "longears"
    api_key: str | None = None
    api_secret: str | None = None

    # Transport
    api_endpoint: str = "https://api.longears.mobi/v1"
    timeout_seconds: float = 30.0
    user_agent: str = f"longears-rcs-sdk/{__version__}"
    agent_id: str | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

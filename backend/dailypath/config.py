"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - time_zone is the single reference calendar for "today" on the server

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from dailypath.core.domain_types import DEFAULT_SHARE_TITLE
from dailypath.core.game_calendar import is_iso_date


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database (distribution store + result counters)
    database_url: str = (
        "postgresql+asyncpg://dailypath:dailypath@db:5432/dailypath"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Admin override channel; an empty token rejects every request
    admin_token: str = ""

    # Catalog
    catalog_path: str = "data/players.csv"

    # Calendar
    time_zone: str = "America/Los_Angeles"
    # Value offered on the first baseline write; today's date when unset
    baseline_start_date: str | None = None

    @field_validator("baseline_start_date", mode="before")
    @classmethod
    def check_baseline_date(cls, v: str | None) -> str | None:
        """Blank means unset; anything else must be YYYY-MM-DD."""
        if isinstance(v, str) and not v.strip():
            return None
        if v is not None and not is_iso_date(v):
            raise ValueError("baseline_start_date must be YYYY-MM-DD")
        return v

    # Results
    results_dedup_enabled: bool = True

    # Share text
    game_title: str = DEFAULT_SHARE_TITLE
    site_url: str | None = None

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

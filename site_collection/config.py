"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - autocomplete_history_size is never negative

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box with no .env
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Recents
    autocomplete_history_size: int = 500

    @field_validator("autocomplete_history_size")
    @classmethod
    def non_negative_history_size(cls, v: int) -> int:
        if v < 0:
            raise ValueError("autocomplete_history_size must be >= 0")
        return v

    # Store
    enforce_invariants: bool = True
    undo_depth: int = 50

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

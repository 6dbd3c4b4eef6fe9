from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import normalize_choice, normalize_level

class Settings(BaseSettings):
    """
    Library settings loaded from environment variables (or a local `.env` file).

    Two groups of knobs live here:
      - logging: how `setup_logging()` builds handlers/formatters for the test session.
      - mocking: defaults the Mock Engine falls back to when a mock or contract
        does not say otherwise (e.g. loose vs strict behavior).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "text"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path | None = None
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5

    # Mocking
    MOCK_DEFAULT_BEHAVIOR: Literal["loose", "strict"] = "loose"
    MOCK_LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # --- Derived settings ---
    @property
    def MOCK_STRICT_BY_DEFAULT(self) -> bool:
        """
        True when mocks created without an explicit behavior should reject
        calls that no setup matches.
        """
        return self.MOCK_DEFAULT_BEHAVIOR == "strict"

    # --- Validators ---
    @field_validator("LOG_LEVEL", "MOCK_LOG_LEVEL", mode="before")
    def normalize_log_levels(cls, v):
        """
        Normalize level names to the uppercase form `logging` expects.

        Accepts "debug", " Info ", or a numeric level such as 10 (mapped back
        to its name). Anything else is passed through and rejected by the
        Literal type check.
        """
        return normalize_level(v)

    @field_validator("LOG_FORMAT", "MOCK_DEFAULT_BEHAVIOR", "ENV", mode="before")
    def normalize_choices(cls, v: str | None) -> str | None:
        """
        Normalize free-form choice values (strip + lowercase).
        """
        return normalize_choice(v)

    # --- ConfigDict settings ---
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() avoids re-reading the environment on every Mock creation.
# Tests that tweak env vars should call get_settings.cache_clear().
@lru_cache()
def get_settings() -> Settings:
    return Settings()

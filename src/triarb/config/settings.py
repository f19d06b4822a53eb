"""
Runtime settings for the CLI and store.

Values come from `TRIARB_`-prefixed environment variables or a `.env`
file and are range-checked by pydantic-settings.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from triarb.config.constants import (
    DEFAULT_PRECISION,
    DEFAULT_STORE_PATH,
    MAX_PRECISION,
    MIN_PRECISION,
    MIN_PROFIT_PCT,
)


class Settings(BaseSettings):
    """
    Discovery, storage and logging settings.

    All settings can be overridden via ``TRIARB_``-prefixed environment
    variables or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRIARB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Storage
    # =========================================================================

    store_path: Path = Field(
        default=Path(DEFAULT_STORE_PATH),
        description="JSON file backing the currency/rate key-value store",
    )

    # =========================================================================
    # Discovery
    # =========================================================================

    default_precision: int = Field(
        default=DEFAULT_PRECISION,
        ge=MIN_PRECISION,
        le=MAX_PRECISION,
        description="Largest multiplier tried when normalizing quantities",
    )

    min_profit_pct: float = Field(
        default=MIN_PROFIT_PCT,
        ge=0.0,
        description="Minimum cycle profit in percent (e.g., 0.01 = 0.01%)",
    )

    max_results: int = Field(
        default=50,
        ge=1,
        le=10_000,
        description="Maximum number of opportunities printed by the CLI",
    )

    # =========================================================================
    # Logging
    # =========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional file receiving DEBUG-level logs",
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("min_profit_pct", mode="after")
    @classmethod
    def validate_profit_threshold(cls, v: float) -> float:
        """Warn if profit threshold is below the float noise floor."""
        if v < MIN_PROFIT_PCT:
            import warnings

            warnings.warn(
                f"Profit threshold {v}% is below {MIN_PROFIT_PCT}%, "
                "break-even loops may be reported",
                stacklevel=2,
            )
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Settings read once per process.

    Tests call `get_settings.cache_clear()` after changing the environment.
    """
    return Settings()

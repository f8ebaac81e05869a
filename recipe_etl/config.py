"""
ETL configuration using Pydantic settings.

All configurable values are loaded from environment variables with sensible defaults.
The parsing engine only reads these values; nothing in the engine writes to them,
so a single Settings instance is safe to share across concurrent imports.
"""
import logging
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the directory containing this config file (recipe_etl/)
_PACKAGE_DIR = Path(__file__).parent.resolve()

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """ETL settings loaded from environment variables."""

    # App metadata
    app_name: str = "Recipe ETL"
    app_version: str = "0.1.0"
    debug: bool = False

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Recipe validation
    title_max_length: int = 100  # Longest accepted recipe title

    # Instruction analysis
    instruction_context_window: int = 20  # Characters inspected each side of a time match

    # Recipe time estimate fallback (used when no instruction mentions a time)
    fallback_min_prep_minutes: int = 5
    fallback_min_cook_minutes: int = 10
    fallback_prep_minutes_per_step: int = 2
    fallback_cook_minutes_per_step: int = 3

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Reject log levels the logging module does not define."""
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid LOG_LEVEL '{v}'. Expected one of: {', '.join(sorted(_LOG_LEVELS))}"
            )
        return level

    @field_validator("title_max_length", "instruction_context_window")
    @classmethod
    def must_not_be_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Value must be zero or greater")
        return v

    model_config = SettingsConfigDict(
        env_file=_PACKAGE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


def get_settings(**overrides) -> Settings:
    """
    Factory function to create Settings instance.

    Useful for testing where you need to override specific values
    without modifying environment variables.

    Args:
        **overrides: Key-value pairs to override default settings

    Returns:
        Settings instance with overrides applied

    Example:
        test_settings = get_settings(title_max_length=80)
    """
    return Settings(**overrides)


def configure_logging(config: Optional[Settings] = None) -> None:
    """Configure root logging with the configured level."""
    config = config or settings
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


# Global settings instance (lazy initialization for testability)
# In tests, you can reload this module or use get_settings() directly
settings = get_settings()

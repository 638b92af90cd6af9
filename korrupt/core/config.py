"""Configuration Management.

Environment-driven defaults for the command-line layer. Values are read
from ``KORRUPT_*`` environment variables and an optional ``.env`` file;
command-line flags take precedence over them.
"""

from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from korrupt.core.constants import DEFAULT_NOISE_DENSITY, DEFAULT_OUTPUT_TEMPLATE


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Korrupt settings.

    Usage:
        from korrupt.core.config import get_settings
        settings = get_settings()
    """

    model_config = SettingsConfigDict(
        env_prefix="KORRUPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    output_template: str = Field(
        default=DEFAULT_OUTPUT_TEMPLATE,
        min_length=1,
        description="Output path template (@@filename@@, @@seed@@, @@index@@)",
    )
    noise_density: float = Field(
        default=DEFAULT_NOISE_DENSITY,
        ge=0.0,
        le=1.0,
        description="Probability that addnoise flips a bit",
    )
    max_input_mb: int = Field(
        default=256, ge=1, description="Largest input file accepted, in MB"
    )
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    log_format: str = Field(default="console", description="Log format: json or console")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        if isinstance(v, str):
            v = v.upper()
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "console"):
            raise ValueError(f"log_format must be 'json' or 'console', got {v!r}")
        return v


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings(force_reload: bool = False) -> Settings:
    """Get application settings (singleton).

    Args:
        force_reload: Force reload settings from environment

    Returns:
        Settings instance

    """
    global _settings
    if _settings is None or force_reload:
        _settings = Settings()
    return _settings

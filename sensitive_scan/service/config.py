# sensitive_scan/service/config.py

"""Application configuration using Pydantic Settings.

Manages environment variables, defaults, and validation rules.
"""

import logging
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sensitive_scan.core.definitions import MatchType


class Settings(BaseSettings):
    """Global application settings.

    Loads values from environment variables (prefix 'SCANNER_') or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    patterns_file: Optional[str] = Field(
        default=None,
        description="Path to a patterns.yaml replacing the packaged rule table.",
    )

    enabled_types: List[str] = Field(
        default_factory=MatchType.all,
        description="Match types the registry is built with.",
    )

    log_level: str = Field(
        default="INFO", description="Logging level for configure_logging()."
    )

    @field_validator("enabled_types")
    @classmethod
    def validate_enabled_types(cls, v: List[str]) -> List[str]:
        """Ensure every enabled type is a known match type."""
        unknown = [t for t in v if t not in MatchType.all()]
        if unknown:
            raise ValueError(f"Unknown match types: {unknown}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the level is one logging understands."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


# Singleton settings instance
settings = Settings()

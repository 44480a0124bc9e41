"""
Global listenkit settings

Values are read from the process environment (after loading a local .env
file) and validated with pydantic.
"""

from typing import Any, Dict, Optional
import os

import dotenv
from pydantic import BaseModel, Field, field_validator

from listenkit.config.logging import logger

dotenv.load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Process-wide listenkit configuration"""

    allow_leaks: bool = Field(
        default=False,
        description="Opt out of the handler teardown pass on legacy script engines",
    )
    log_level: str = Field(default="WARNING", description="Level for listenkit loggers")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from LISTENKIT_* environment variables"""
        data: Dict[str, Any] = {}
        allow_leaks = os.getenv("LISTENKIT_ALLOW_LEAKS")
        if allow_leaks is not None:
            data["allow_leaks"] = allow_leaks.strip().lower() in _TRUTHY
        log_level = os.getenv("LISTENKIT_LOG_LEVEL")
        if log_level:
            data["log_level"] = log_level
        if data:
            logger.debug(
                f"Settings overridden from environment: {sorted(data)}",
                extra={"class_name": "Settings"},
            )
        return cls(**data)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def initialize_settings(**overrides) -> Settings:
    """Initialize settings from the environment with optional overrides"""
    global _settings
    _settings = Settings(**{**Settings.from_env().model_dump(), **overrides})
    return _settings


def reset_settings() -> None:
    """Reset settings to default (useful for testing)"""
    global _settings
    _settings = None

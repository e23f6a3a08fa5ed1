"""Core service settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class BaseSettings:
    """Service-wide settings.

    Attributes:
        environment: Runtime environment (development|staging|production)
        service_name: Name stamped on logs
        debug: Debug mode
        log_level: Root log level
        host: Bind address for uvicorn
        port: Bind port for uvicorn
    """

    environment: Environment = "development"
    service_name: str = "bookio_voice"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Validate the settings.

        Returns:
            List of errors (empty means OK).
        """
        errors: list[str] = []

        if self.environment not in {"development", "staging", "production"}:
            errors.append(f"Invalid ENVIRONMENT: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME must not be empty")

        if self.log_level.upper() not in _VALID_LOG_LEVELS:
            errors.append(f"Invalid LOG_LEVEL: {self.log_level}")

        if not 0 < self.port < 65536:
            errors.append(f"Invalid PORT: {self.port}")

        return errors


def _parse_environment(env_str: str) -> Environment:
    """Map an environment string to ``Environment``."""
    env_lower = env_str.lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _load_base_from_env() -> BaseSettings:
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "bookio_voice"),
        debug=os.getenv("DEBUG", "").lower() in ("true", "1", "yes"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Return the cached BaseSettings instance."""
    return _load_base_from_env()

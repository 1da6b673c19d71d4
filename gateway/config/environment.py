"""Environment variable loading and validation."""

import os
from typing import Optional

from gateway.logging import get_logger

from .exceptions import ConfigurationError

logger = get_logger(__name__, component="config")

DEFAULT_BASE_URL = "https://app.ticketmaster.com/discovery/v2"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.host = host or DEFAULT_HOST
        self.port = port or DEFAULT_PORT
        self.log_level = log_level
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Environment variables:
    - TM_API_KEY: Discovery API key (a missing key only logs a warning; every
      upstream call will then be rejected by the Discovery API)
    - TM_BASE_URL: Discovery API base URL (default: https://app.ticketmaster.com/discovery/v2)
    - HOST: Interface to bind the HTTP server to (default: 127.0.0.1)
    - PORT: HTTP server port, 1-65535 (default: 8080)
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label attached to every log record (default: local)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If any variable is present but invalid
    """
    errors = []

    api_key = os.getenv("TM_API_KEY", "").strip()
    base_url = os.getenv("TM_BASE_URL")
    host = os.getenv("HOST")
    port_str = os.getenv("PORT")
    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")

    if base_url and not base_url.startswith(("http://", "https://")):
        errors.append(f"Invalid TM_BASE_URL: '{base_url}'. Must start with http:// or https://")

    port = None
    if port_str:
        try:
            port = int(port_str)
            if port < 1 or port > 65535:
                errors.append(f"Invalid PORT: {port}. Must be between 1 and 65535.")
        except ValueError:
            errors.append(f"Invalid PORT: '{port_str}'. Must be a valid integer.")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your values",
                "Verify PORT is a number between 1 and 65535",
            ],
        )

    if not api_key:
        logger.warning(
            "Missing TM_API_KEY; upstream requests will be rejected",
            extra={"event": "config.api_key.missing"},
        )

    return EnvironmentConfig(
        api_key=api_key,
        base_url=base_url,
        host=host,
        port=port,
        log_level=log_level.upper() if log_level else None,
        environment=environment,
    )

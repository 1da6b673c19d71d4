"""Configuration management module for the event discovery gateway."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    AppConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    ServerConfig,
    UpstreamConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "UpstreamConfig",
    "ServerConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]

"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class UpstreamConfig(BaseModel):
    """Settings for calls to the Discovery API."""

    timeout: int = Field(
        10, ge=1, le=120, description="Request timeout for Discovery API calls (seconds)"
    )
    user_agent: str = Field(
        "EventGateway/1.0",
        min_length=1,
        description="User-Agent string for upstream requests",
    )

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class ServerConfig(BaseModel):
    """HTTP surface settings."""

    cors_origins: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API ('*' for any)",
    )

    @field_validator("cors_origins")
    @classmethod
    def normalize_origins(cls, v: List[str]) -> List[str]:
        """Strip origins and drop blanks; an empty list means any origin."""
        origins = [origin.strip() for origin in v if origin and origin.strip()]
        return origins or ["*"]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object read from the optional YAML file."""

    upstream: UpstreamConfig = Field(
        default_factory=UpstreamConfig, description="Discovery API client settings"
    )
    server: ServerConfig = Field(default_factory=ServerConfig, description="HTTP settings")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

"""Main entry point for the event discovery gateway."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
from pathlib import Path
from typing import Optional, Tuple

from flask import Flask

from gateway.api import create_app
from gateway.config.environment import EnvironmentConfig
from gateway.config.exceptions import ConfigurationError
from gateway.config.loader import load_config
from gateway.config.models import AppConfig
from gateway.discovery.client import DiscoveryClient
from gateway.discovery.exceptions import ClientConfigurationError
from gateway.discovery.service import DiscoveryService
from gateway.logging import get_logger
from gateway.logging.config import configure_logging

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file > INFO.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def build_app(app_config: AppConfig, env_config: EnvironmentConfig) -> Flask:
    """Assemble client, service and Flask app from loaded configuration.

    Raises:
        ConfigurationError: If the upstream client settings are rejected
    """
    try:
        client = DiscoveryClient(
            base_url=env_config.base_url,
            timeout=app_config.upstream.timeout,
            user_agent=app_config.upstream.user_agent,
        )
    except ClientConfigurationError as e:
        raise ConfigurationError(
            f"Invalid upstream client settings: {e}",
            suggestions=["Check TM_BASE_URL and the upstream section of config.yaml"],
        ) from e

    service = DiscoveryService(client, api_key=env_config.api_key)
    return create_app(service, app_config.server)


def main(argv: Optional[list] = None) -> int:
    """
    Run the gateway's HTTP server.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = argparse.ArgumentParser(
        description="Event Gateway - simplified search, detail, venue and suggest API over the Ticketmaster Discovery API"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument("--host", default=None, help="Interface to bind (overrides HOST)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (overrides PORT)")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    args = parser.parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        host = args.host or env_config.host
        port = args.port or env_config.port

        app = build_app(app_config, env_config)

        logger.info(
            f"Server running on http://{host}:{port}",
            extra={
                "event": "service.starting",
                "host": host,
                "port": port,
                "upstream": env_config.base_url,
                "log_level": env_config.log_level,
            },
        )

        app.run(host=host, port=port)

        logger.info("Event gateway stopped", extra={"event": "service.stopping"})
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 0


if __name__ == "__main__":
    sys.exit(main())

"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check a raw configuration dictionary for settings that are valid but risky.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    upstream = config_dict.get("upstream", {})
    if isinstance(upstream, dict):
        timeout = upstream.get("timeout", 10)
        if isinstance(timeout, int) and timeout > 30:
            warning_messages.append(
                f"Long upstream timeout ({timeout}s) keeps client requests waiting on a slow Discovery API"
            )

    server = config_dict.get("server", {})
    if isinstance(server, dict):
        origins = server.get("cors_origins", [])
        if isinstance(origins, list) and "*" in origins and len(origins) > 1:
            warning_messages.append(
                "cors_origins contains '*' alongside explicit origins; every origin will be allowed"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)

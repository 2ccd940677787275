"""
Logging configuration utilities for localgit.

Usage:
    from localgit.logging_config import configure_from_environment

    configure_from_environment()
"""

import os
from typing import Any, Dict, Optional

from localgit.logger import configure_logger, get_logger


def configure_from_settings(settings: Dict[str, Any]) -> None:
    """Configure logger from a settings dict.

    Args:
        settings: Dictionary with logging settings.
            Expected keys (all optional):
            - log_enabled: bool
            - log_level: str ('ERROR', 'WARN', 'INFO', 'DEBUG', 'TRACE')
            - log_directory: str (path to log directory)
            - log_console: bool
    """
    configure_logger(
        enabled=settings.get("log_enabled", True),
        level=settings.get("log_level", "INFO"),
        log_directory=settings.get("log_directory") or None,
        console_output=settings.get("log_console", False),
        session_id=settings.get("session_id"),
    )


def configure_from_environment() -> None:
    """Configure logger from environment variables.

    Environment variables:
        LOCALGIT_LOG_ENABLED: '0', '1', 'true', 'false'
        LOCALGIT_LOG_LEVEL: 'ERROR', 'WARN', 'INFO', 'DEBUG', 'TRACE'
        LOCALGIT_LOG_DIR: Path to log directory
        LOCALGIT_LOG_CONSOLE: '0', '1', 'true', 'false'
        LOCALGIT_SESSION_ID: Session ID for correlation
    """
    configure_logger(
        enabled=parse_bool(os.environ.get("LOCALGIT_LOG_ENABLED"), True),
        level=os.environ.get("LOCALGIT_LOG_LEVEL", "INFO"),
        log_directory=os.environ.get("LOCALGIT_LOG_DIR"),
        console_output=parse_bool(os.environ.get("LOCALGIT_LOG_CONSOLE"), False),
        session_id=os.environ.get("LOCALGIT_SESSION_ID"),
    )


def parse_bool(value: Optional[str], default: bool) -> bool:
    """Parse string to boolean."""
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "on")


def get_session_id() -> str:
    """Get current session ID."""
    return get_logger().session_id


__all__ = [
    "configure_from_settings",
    "configure_from_environment",
    "parse_bool",
    "get_session_id",
]

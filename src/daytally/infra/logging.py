"""
Logging configuration for DayTally.

This module configures structlog for JSON logging across the application.
"""

import logging
import re
from typing import Any

import structlog

from .settings import settings


def redact_secrets(_, __, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Redact sensitive information from log events."""
    secret_keys = [
        "token",
        "password",
        "secret",
        "api_key",
        "connection_string",
        "database_url",
    ]

    # Patterns to redact in string values
    secret_patterns = [
        r"://[^:]+:[^@]+@",  # URLs with credentials
        r"token=[^&\s]+",  # Token parameters
        r"password=[^&\s]+",  # Password parameters
    ]

    def redact_value(value: Any) -> Any:
        if isinstance(value, str):
            for pattern in secret_patterns:
                value = re.sub(pattern, lambda m: m.group(0).split("=")[0] + "=***", value)
            return value
        elif isinstance(value, dict):
            return {k: redact_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [redact_value(item) for item in value]
        return value

    for key in list(event_dict.keys()):
        if any(secret in key.lower() for secret in secret_keys):
            event_dict[key] = "***REDACTED***"
        else:
            event_dict[key] = redact_value(event_dict[key])

    return event_dict


def configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging and structlog for JSON output."""
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            redact_secrets,  # Redact secrets before rendering
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a configured logger with service context."""
    # Initial values keep the proxy lazy, so module-level loggers pick up
    # whatever configuration is active when they first log.
    return structlog.get_logger(name, service="daytally", env=settings.env)

"""
Structured logging for the Stockroom API.

Every record (ours and stdlib ones from uvicorn/SQLAlchemy) goes through one
structlog pipeline: JSON lines in production, a colored console in development.
Business events carry `tenant_id` as an explicit key, and the request id from
`asgi-correlation-id` is attached automatically.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from asgi_correlation_id import correlation_id

from stockroom.config import get_settings

SERVICE_NAME = "stockroom"

# Libraries that are chatty at INFO/DEBUG
NOISY_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "python_multipart": logging.WARNING,
    "multipart": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}

_configured = False


def add_correlation_id(logger, method_name, event_dict):
    request_id = correlation_id.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_service_context(logger, method_name, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("env", get_settings().ENVIRONMENT)
    return event_dict


def _renderer(json_logs: bool):
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structlog and route stdlib logging through it. Safe to call twice."""
    global _configured
    if _configured:
        return

    settings = get_settings()
    json_logs = settings.ENVIRONMENT == "production"

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_correlation_id,
        add_service_context,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(json_logs),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    # uvicorn --reload and repeated imports would otherwise stack handlers
    root_logger.handlers = [handler]
    root_logger.setLevel((level or settings.LOG_LEVEL).upper())

    for name, noisy_level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)

    _configured = True

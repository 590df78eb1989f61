# classifiedsutils/logging.py
"""
Structured logging for the marketplace backend, built on structlog.

Development gets a coloured console renderer, every other environment
gets one JSON object per line. Standard library loggers (Django, Celery)
are routed through the same handlers so their output lands next to ours.

Usage:
    from classifiedsutils.logging import get_logger

    logger = get_logger(__name__)
    logger.info("listing_submitted", listing_id=42, status="pending")
"""

import logging
import logging.config
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path

import structlog
from django.conf import settings
from structlog.contextvars import bind_contextvars, clear_contextvars
from structlog.types import Processor

APP_NAME = "classifieds"


def is_development() -> bool:
    return getattr(settings, "DEBUG", False)


def get_log_level() -> int:
    level_name = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    return logging.getLevelNamesMapping().get(level_name, logging.INFO)


def get_logs_dir() -> Path:
    logs_dir = Path(settings.BASE_DIR) / "logs"
    logs_dir.mkdir(exist_ok=True)
    return logs_dir


# =============================================================================
# PROCESSORS
# =============================================================================


def add_service_context(logger, name: str, event_dict: dict) -> dict:
    """Stamp every entry with the application and deployment environment."""
    event_dict["app"] = APP_NAME
    event_dict["environment"] = getattr(settings, "ENVIRONMENT", "unknown")
    return event_dict


def add_utc_timestamp(logger, name: str, event_dict: dict) -> dict:
    event_dict["timestamp"] = (
        datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace(
            "+00:00", "Z"
        )
    )
    return event_dict


def rename_event_to_message(logger, name: str, event_dict: dict) -> dict:
    event_dict["message"] = event_dict.pop("event")
    return event_dict


def drop_exc_info_below_error(logger, name: str, event_dict: dict) -> dict:
    if event_dict.get("level") not in ("error", "critical"):
        event_dict.pop("exc_info", None)
        event_dict.pop("exception", None)
    return event_dict


def order_keys(logger, name: str, event_dict: dict) -> dict:
    key_order = ["timestamp", "level", "logger", "message", "request_id"]
    ordered = {key: event_dict.pop(key) for key in key_order if key in event_dict}
    ordered.update(event_dict)
    return ordered


SHARED_PROCESSORS: list[Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    add_service_context,
    add_utc_timestamp,
    structlog.processors.StackInfoRenderer(),
]

DEV_PROCESSORS: list[Processor] = [
    *SHARED_PROCESSORS,
    rename_event_to_message,
    structlog.dev.ConsoleRenderer(
        colors=True, exception_formatter=structlog.dev.plain_traceback
    ),
]

PROD_PROCESSORS: list[Processor] = [
    *SHARED_PROCESSORS,
    drop_exc_info_below_error,
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    rename_event_to_message,
    order_keys,
    structlog.processors.JSONRenderer(),
]


# =============================================================================
# CONFIGURATION
# =============================================================================


def get_standard_logging_config() -> dict:
    """dictConfig for the standard library side (Django, Celery, requests)."""
    logs_dir = get_logs_dir()
    log_level = get_log_level()
    file_formatter = "verbose" if is_development() else "json"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "verbose": {
                "format": "{levelname} {asctime} {name} {process:d} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "level": log_level,
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
            },
            "file": {
                "level": "DEBUG",
                "class": "logging.handlers.RotatingFileHandler",
                "filename": logs_dir / "classifieds.log",
                "maxBytes": 1024 * 1024 * 10,
                "backupCount": 5,
                "formatter": file_formatter,
            },
            "error_file": {
                "level": "ERROR",
                "class": "logging.handlers.RotatingFileHandler",
                "filename": logs_dir / "classifieds_error.log",
                "maxBytes": 1024 * 1024 * 10,
                "backupCount": 10,
                "formatter": "json",
            },
        },
        "loggers": {
            "django": {
                "handlers": ["console", "file"],
                "level": log_level,
                "propagate": False,
            },
            "django.request": {
                "handlers": ["error_file"],
                "level": "ERROR",
                "propagate": False,
            },
            "celery": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False,
            },
            "urllib3": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            APP_NAME: {
                "handlers": ["console", "file", "error_file"],
                "level": "DEBUG" if is_development() else "INFO",
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["console", "file"],
            "level": log_level,
        },
    }


def configure_structlog() -> None:
    structlog.configure(
        processors=DEV_PROCESSORS if is_development() else PROD_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging() -> None:
    """Configure stdlib logging and structlog. Called once from AppConfig.ready."""
    logging.config.dictConfig(get_standard_logging_config())
    configure_structlog()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# =============================================================================
# REQUEST CONTEXT MIDDLEWARE
# =============================================================================


class StructlogMiddleware:
    """
    Binds a request id to every log entry emitted while serving a request.

    The id is taken from ``X-Request-ID`` when the client sends one and is
    echoed back in the response header.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        clear_contextvars()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.request_id = request_id
        bind_contextvars(
            request_id=request_id,
            request_method=request.method,
            request_path=request.path,
        )

        response = self.get_response(request)
        response["X-Request-ID"] = request_id
        return response


__all__ = [
    "APP_NAME",
    "StructlogMiddleware",
    "configure_logging",
    "configure_structlog",
    "get_log_level",
    "get_logger",
    "get_logs_dir",
    "get_standard_logging_config",
    "is_development",
]

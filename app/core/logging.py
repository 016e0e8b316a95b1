"""Structured Logging Configuration

JSON lines (python-json-logger) in deployed environments, plain text for
local work. Every record emitted while a request is in flight carries its
correlation id, set by RequestIDMiddleware through a context variable.
Credential-bearing fields passed in ``extra`` are masked before they reach
any handler.
"""

import logging
import sys
from contextvars import ContextVar
from typing import Optional
from pythonjsonlogger import jsonlogger

from app.config import settings

REDACTED = "***"
SENSITIVE_FIELDS = frozenset({"password", "token", "authorization", "hashed_password", "secret_key"})

_HANDLER_NAME = "driveme"

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    """Stamp the current request id on records that did not pass one in ``extra``"""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "correlation_id", None) is None:
            record.correlation_id = correlation_id_var.get()
        return True


class RedactingFilter(logging.Filter):
    """Mask credential fields supplied through ``extra``"""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in SENSITIVE_FIELDS:
            if field in record.__dict__:
                setattr(record, field, REDACTED)
        return True


class DriveMeJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that stamps service metadata on every record"""

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = settings.APP_NAME
        log_record["environment"] = settings.ENVIRONMENT

        for key in ("correlation_id", "user_id"):
            value = getattr(record, key, None)
            if value is not None:
                log_record[key] = str(value)


def _build_formatter() -> logging.Formatter:
    if settings.LOG_FORMAT == "json":
        return DriveMeJsonFormatter(
            fmt="%(asctime)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S"
        )
    return logging.Formatter(
        fmt="%(asctime)s %(levelname)-7s [%(name)s] %(message)s",
        datefmt="%H:%M:%S"
    )


def setup_logging() -> None:
    """Install the DriveMe handler on the root logger (safe to call twice)"""
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL.upper())

    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(_build_formatter())
    handler.addFilter(CorrelationIdFilter())
    handler.addFilter(RedactingFilter())
    root_logger.addHandler(handler)

    # SQL echo only when explicitly debugging locally
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.is_development and settings.DEBUG else logging.WARNING
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

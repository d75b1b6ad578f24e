"""Logging setup shared by the API and the CLI.

Every record carries the current request context (request id, path,
method) when there is one, so checkout and refund lines can be tied
back to the HTTP call that caused them. Callers attach structured
fields with ``extra={"extra_fields": {...}}``.
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

from storefront.infrastructure.settings import Settings, get_settings

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_request_fields: ContextVar[dict[str, Any]] = ContextVar("request_fields", default={})


def set_request_context(request_id: str | None = None, **fields: Any) -> str:
    """Bind a request id (generated when missing) and extra fields to this context."""
    request_id = request_id or uuid.uuid4().hex
    _request_id.set(request_id)
    _request_fields.set(dict(fields))
    return request_id


def get_request_id() -> str | None:
    return _request_id.get()


def clear_request_context() -> None:
    _request_id.set(None)
    _request_fields.set({})


class RequestContextFilter(logging.Filter):
    """Copies the bound request context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        record.request_fields = _request_fields.get()
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shipping outside local dev."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: dict[str, Any] = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "timestamp": self.formatTime(record, self.datefmt),
        }

        request_id = getattr(record, "request_id", "-")
        if request_id != "-":
            log_record["request_id"] = request_id
            log_record.update(getattr(record, "request_fields", {}))

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            log_record.update(extra_fields)

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure global logging settings.

    Local runs get a readable single line per record; every other
    environment gets JSON.
    """
    settings = settings or get_settings()

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.addFilter(RequestContextFilter())

    if settings.ENVIRONMENT == "local":
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
        )
    else:
        formatter = JsonFormatter()

    handler.setFormatter(formatter)

    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

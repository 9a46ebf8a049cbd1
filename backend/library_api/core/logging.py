"""Structured JSON Logging Configuration.

Every record is a JSON object carrying the id of the request it was written
for and, when tracing is on, the active trace and span ids.
"""

import logging
import sys
from contextvars import ContextVar

from pythonjsonlogger import jsonlogger

from ..utils import generate_request_id
from .config import settings
from .tracing import get_span_id, get_trace_id

SERVICE_NAME = "library-api"

# Libraries whose INFO output drowns the request logs
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")

request_id_var: ContextVar[str | None] = ContextVar('request_id', default=None)


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding service, request and trace context to each record."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = record.created
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['service'] = SERVICE_NAME
        log_record['environment'] = settings.ENVIRONMENT

        request_id = request_id_var.get()
        if request_id:
            log_record['request_id'] = request_id

        trace_id = get_trace_id()
        if trace_id:
            log_record['trace_id'] = trace_id
            log_record['span_id'] = get_span_id()

        log_record['location'] = f"{record.filename}:{record.lineno} {record.funcName}"


def setup_logging():
    """Route all logging through one JSON handler on stdout."""
    level = getattr(logging, settings.LOG_LEVEL)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(CustomJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s'))
    root.addHandler(handler)

    if not settings.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(max(level, logging.WARNING))

    root.info(
        "Logging configured",
        extra={'log_level': settings.LOG_LEVEL, 'debug': settings.DEBUG}
    )
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_request_id(request_id: str | None = None) -> str:
    """Bind a request id to the current context, generating one when not given."""
    if request_id is None:
        request_id = generate_request_id()
    request_id_var.set(request_id)
    return request_id


def get_request_id() -> str | None:
    """Request id of the current context, or None outside a request."""
    return request_id_var.get()

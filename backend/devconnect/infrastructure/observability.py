"""Structured Logging — JSON log lines that carry the request and caller they belong to.

Invariants:
    - Every record has timestamp, level, logger and message
    - Inside a request, records also get request_id, method and path, plus
      identity_id once the caller is resolved (bind_caller)
    - Explicit extras win over the bound request context
    - setup_logging() is idempotent: calling it twice does not double the output

Design Decisions:
    - ContextVar holds the per-request fields, so stores and routes log with a
      plain logger.info(...) and still get request correlation
    - stdlib logging + a small JSON formatter, no logging dependency
"""

import json
import logging
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "request_id", "method", "path", "identity_id", "post_id",
    "error_code", "step", "cause", "status_code", "duration_ms",
)

_request_context: ContextVar[dict | None] = ContextVar(
    "devconnect_request_context", default=None,
)


def bind_request(method: str, path: str, request_id: str | None = None) -> str:
    """Start a request context; returns the request id used."""
    request_id = request_id or uuid.uuid4().hex[:16]
    _request_context.set(
        {"request_id": request_id, "method": method, "path": path},
    )
    return request_id


def bind_caller(identity_id) -> None:
    ctx = _request_context.get()
    if ctx is not None:
        _request_context.set({**ctx, "identity_id": str(identity_id)})


def clear_request() -> None:
    _request_context.set(None)


class RequestContextFilter(logging.Filter):
    """Copy the bound request fields onto each record that lacks them."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in (_request_context.get() or {}).items():
            if record.__dict__.get(key) is None:
                setattr(record, key, value)
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


_HANDLER_NAME = "devconnect"


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the DevConnect handler on the root logger."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.addFilter(RequestContextFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s",
            defaults={"request_id": "-"},
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo stays off unless asked for explicitly
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

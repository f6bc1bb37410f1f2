"""
Structured logging with request ID propagation.

JSON lines when stderr is not a TTY (servers, pipes), a readable one-line
format otherwise.
"""

import contextvars
import json
import logging
import sys
import uuid
from datetime import UTC, datetime
from typing import Any

_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

# LogRecord attributes that are not user-supplied `extra` fields
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys() | {"message", "taskName"}
)


def get_request_id() -> str | None:
    return _request_id_var.get()


def generate_request_id() -> str:
    return f"req-{uuid.uuid4().hex[:16]}"


class RequestContext:
    """
    Bind a request ID to every log record emitted inside the block.

    Usage:
        with RequestContext(request_id=header_value) as ctx:
            logger.info("Checking conflicts")
    """

    def __init__(self, request_id: str | None = None):
        self.request_id = request_id or generate_request_id()
        self._token: contextvars.Token | None = None

    def __enter__(self) -> "RequestContext":
        self._token = _request_id_var.set(self.request_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _request_id_var.reset(self._token)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """`extra=` fields passed to the logging call (task_id, slots, ...)."""
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line:
    {"timestamp": "...Z", "level": "INFO", "logger": "planner.conflicts",
     "message": "...", "request_id": "req-...", <extra fields>}
    """

    def format(self, record: logging.LogRecord) -> str:
        now = datetime.fromtimestamp(record.created, UTC)
        entry: dict[str, Any] = {
            "timestamp": now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if (request_id := get_request_id()) is not None:
            entry["request_id"] = request_id
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(_extra_fields(record))
        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """`2026-10-19 09:30:00 [INFO] planner.conflicts: [req-abc] message key=value`"""

    default_time_format = "%Y-%m-%d %H:%M:%S"
    default_msec_format = None

    def format(self, record: logging.LogRecord) -> str:
        parts = [f"{self.formatTime(record)} [{record.levelname}] {record.name}:"]
        request_id = get_request_id()
        if request_id:
            parts.append(f"[{request_id[:12]}]")
        parts.append(record.getMessage())
        parts.extend(f"{k}={v}" for k, v in _extra_fields(record).items())
        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str = "INFO", json_format: bool | None = None) -> None:
    """
    Configure the root logger, replacing any handlers already installed.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Force JSON output. None = JSON unless stderr is a TTY.
    """
    if json_format is None:
        json_format = not sys.stderr.isatty()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)


class CorrelationIdMiddleware:
    """
    ASGI middleware: runs each HTTP request inside a RequestContext.

    Reuses the caller's X-Request-ID header when present and echoes the ID
    back on the response.
    """

    header = b"x-request-id"

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        headers = {k.lower(): v for k, v in scope.get("headers", [])}
        incoming = headers.get(self.header, b"").decode("latin-1") or None

        with RequestContext(request_id=incoming) as ctx:
            echoed = (self.header, ctx.request_id.encode("latin-1"))

            async def send_with_id(message):
                if message["type"] == "http.response.start":
                    message = {**message, "headers": [*message.get("headers", []), echoed]}
                await send(message)

            await self.app(scope, receive, send_with_id)

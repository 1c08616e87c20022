"""
JSON log records correlated with the request that produced them.

Every record emitted while a request is active carries a ``request_id``. The
id comes from the first safe correlation header the client sent, or is minted
on first use, and the same value is echoed on the response. Attributes passed
through ``extra=`` (``error_ref``, ``status``, ``content_type``, ...) end up
as top-level keys of the JSON line.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import IO, Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

from responsekit.support.headers import Headers, is_safe

CORRELATION_HEADERS = (Headers.REQUEST_ID, "X-Correlation-ID")
MAX_REQUEST_ID_LENGTH = 128
HANDLER_NAME = "responsekit.json"

log = logging.getLogger(__name__)

_REQUEST_ID_KEY = "request_id"
_STARTED_KEY = "response_started"
# Attributes every LogRecord has; anything else was passed through ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, _REQUEST_ID_KEY, None),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and key not in payload:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on every record, ``None`` outside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def _client_request_id() -> str | None:
    for header in CORRELATION_HEADERS:
        value = request.headers.get(header, "").strip()
        if value and len(value) <= MAX_REQUEST_ID_LENGTH and is_safe(value):
            return value
    return None


def ensure_request_id() -> str:
    """Return the current request id, minting one when none is known yet.

    Outside a request context a fresh id is returned on every call.
    """

    if not has_request_context():
        return uuid4().hex
    request_id = g.get(_REQUEST_ID_KEY)
    if request_id is None:
        request_id = _client_request_id() or uuid4().hex
        setattr(g, _REQUEST_ID_KEY, request_id)
    return request_id


def configure_logging(level: str | int = "INFO", stream: IO[str] | None = None) -> logging.Handler:
    """Send root logger output to ``stream`` (stdout by default) as JSON lines.

    Parameters
    ----------
    level:
        Level name or number applied to the root logger.
    stream:
        Text stream receiving the records.

    Returns
    -------
    logging.Handler
        The installed handler. A handler installed by an earlier call is
        replaced; handlers added by the host application are left alone.
    """

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    return handler


def init_app(app: Flask) -> None:
    """Correlate ``app``'s requests: seed the id, echo it and log completion."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _seed_request_id() -> None:
        ensure_request_id()
        setattr(g, _STARTED_KEY, time.perf_counter())

    @app.after_request
    def _echo_request_id(response: Response) -> Response:
        response.headers.setdefault(Headers.REQUEST_ID, ensure_request_id())
        started = g.get(_STARTED_KEY)
        log.debug(
            "%s %s -> %s",
            request.method,
            request.path,
            response.status_code,
            extra={
                "status": response.status_code,
                "content_type": response.mimetype,
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 2) if started else None,
            },
        )
        return response


__all__ = ["JSONFormatter", "RequestIdFilter", "configure_logging", "ensure_request_id", "init_app"]

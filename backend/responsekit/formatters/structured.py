"""JSON family formatters: plain JSON, problem+json and newline-delimited JSON."""

from __future__ import annotations

import json
from typing import Any

from responsekit.core.errors import SerializationError
from responsekit.support.content_type import ContentType
from responsekit.support.data import to_plain


def _dumps(value: Any, *, pretty: bool = False) -> str:
    """Encode ``value`` as strict JSON, mapping encoder failures to ``SerializationError``."""

    try:
        if pretty:
            return json.dumps(value, ensure_ascii=False, allow_nan=False, indent=4)
        return json.dumps(value, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"JSON encoding failed: {exc}") from exc


class JsonFormatter:
    """Render payloads as compact (or indented) JSON.

    Parameters
    ----------
    pretty:
        Indent output by four spaces when ``True``.

    Notes
    -----
    Non-finite floats (``NaN``, ``inf``) are rejected instead of being written
    as the non-standard ``NaN`` token.
    """

    content_type = ContentType.JSON

    def __init__(self, pretty: bool = False) -> None:
        self.pretty = pretty

    def format(self, payload: Any) -> str:
        return _dumps(to_plain(payload), pretty=self.pretty)


class ProblemJsonFormatter(JsonFormatter):
    """JSON encoder declared as ``application/problem+json`` (RFC 9457)."""

    content_type = ContentType.PROBLEM_JSON


class NdJsonFormatter:
    """Render a sequence of records as newline-delimited JSON.

    A mapping or scalar payload is treated as a single record.
    """

    content_type = ContentType.NDJSON

    def format(self, payload: Any) -> str:
        data = to_plain(payload)
        if not isinstance(data, list):
            data = [data]
        return "\n".join(_dumps(item) for item in data)


__all__ = ["JsonFormatter", "ProblemJsonFormatter", "NdJsonFormatter"]

"""Plain-text formatter."""

from __future__ import annotations

from pprint import pformat
from typing import Any

from responsekit.support.content_type import ContentType, with_charset
from responsekit.support.data import to_plain

TRUNCATION_MARKER = "... [truncated]"


class TextFormatter:
    """Render scalars verbatim and structures with :func:`pprint.pformat`.

    Structured output longer than ``max_length`` characters is cut and suffixed
    with ``"... [truncated]"``.
    """

    content_type = with_charset(ContentType.TEXT)

    def __init__(self, max_length: int = 10000) -> None:
        self.max_length = max_length

    def format(self, payload: Any) -> str:
        if payload is None:
            return ""
        if isinstance(payload, (str, int, float, bool)):
            return str(payload)
        text = pformat(to_plain(payload), sort_dicts=False)
        if len(text) > self.max_length:
            text = text[: self.max_length] + TRUNCATION_MARKER
        return text


__all__ = ["TextFormatter", "TRUNCATION_MARKER"]

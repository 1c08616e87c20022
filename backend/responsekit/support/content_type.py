"""Content type constants and normalization helpers."""

from __future__ import annotations

import mimetypes
from typing import Final


class ContentType:
    """Media types produced by the built-in formatters."""

    JSON: Final[str] = "application/json"
    PROBLEM_JSON: Final[str] = "application/problem+json"
    NDJSON: Final[str] = "application/x-ndjson"
    XML: Final[str] = "application/xml"
    CSV: Final[str] = "text/csv"
    TEXT: Final[str] = "text/plain"
    OCTET_STREAM: Final[str] = "application/octet-stream"


def base_type(content_type: str) -> str:
    """Return ``content_type`` lowercased, trimmed and without parameters.

    ``"Application/JSON; charset=utf-8"`` becomes ``"application/json"``.
    """

    return content_type.split(";", 1)[0].strip().lower()


def with_charset(content_type: str, charset: str = "utf-8") -> str:
    """Append a ``charset`` parameter unless one is already present."""

    if "charset=" in content_type.lower():
        return content_type
    return f"{content_type}; charset={charset}"


def from_file_path(path: str) -> str:
    """Guess a content type from a file extension.

    Falls back to ``application/octet-stream`` when the extension is unknown.
    """

    guessed, _encoding = mimetypes.guess_type(path)
    return guessed or ContentType.OCTET_STREAM


__all__ = ["ContentType", "base_type", "with_charset", "from_file_path"]

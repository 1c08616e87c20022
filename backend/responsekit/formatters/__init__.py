"""Built-in response formatters.

Each formatter declares the ``content_type`` it emits and turns a payload into
text; see :class:`responsekit.formatters.base.ResponseFormatter`.
"""

from __future__ import annotations

from .base import ResponseFormatter
from .markup import XmlFormatter
from .structured import JsonFormatter, NdJsonFormatter, ProblemJsonFormatter
from .tabular import CsvFormatter
from .text import TextFormatter


def builtin_formatters() -> list[ResponseFormatter]:
    """Return fresh instances of every built-in formatter, JSON first."""

    return [
        JsonFormatter(),
        TextFormatter(),
        NdJsonFormatter(),
        CsvFormatter(),
        ProblemJsonFormatter(),
        XmlFormatter(),
    ]


__all__ = [
    "ResponseFormatter",
    "JsonFormatter",
    "ProblemJsonFormatter",
    "NdJsonFormatter",
    "CsvFormatter",
    "XmlFormatter",
    "TextFormatter",
    "builtin_formatters",
]

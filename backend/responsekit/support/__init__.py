"""Constant tables and small helpers shared by the builders and formatters."""

from __future__ import annotations

from .content_type import ContentType, base_type, from_file_path, with_charset
from .headers import Headers, apply_headers, cache_control, content_disposition, is_safe

__all__ = [
    "ContentType",
    "Headers",
    "apply_headers",
    "base_type",
    "cache_control",
    "content_disposition",
    "from_file_path",
    "is_safe",
    "with_charset",
]

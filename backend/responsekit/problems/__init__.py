"""Problem details (RFC 9457): error classification and response assembly."""

from __future__ import annotations

from .mapper import (
    DEFAULT_RULES,
    DefaultExceptionMapper,
    ExceptionMapper,
    HasValidationErrors,
    HTTPExceptionRule,
    ProblemRecord,
    ProblemRule,
    name_contains,
)

__all__ = [
    "DEFAULT_RULES",
    "DefaultExceptionMapper",
    "ExceptionMapper",
    "HTTPExceptionRule",
    "HasValidationErrors",
    "ProblemRecord",
    "ProblemRule",
    "name_contains",
]

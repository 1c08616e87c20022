"""HTTP response construction for Flask/werkzeug applications.

Formatters render payloads, the negotiator picks one from the ``Accept``
header, the exception mapper classifies errors into RFC 9457 problem records
and the builders wrap everything into responses.
"""

from __future__ import annotations

from responsekit.builders import ResponseBuilder, StreamResponseBuilder
from responsekit.core.config import Settings
from responsekit.core.errors import (
    ConfigurationError,
    DownloadNotFoundError,
    ResponseKitError,
    SerializationError,
)
from responsekit.extension import ResponseKit
from responsekit.negotiation import AcceptHeaderNegotiator
from responsekit.pagination import Pagination
from responsekit.problems import DefaultExceptionMapper, ProblemRecord
from responsekit.problems.factory import ProblemDetailsFactory
from responsekit.registry import FormatterRegistry, default_registry

__version__ = "0.1.0"

__all__ = [
    "AcceptHeaderNegotiator",
    "ConfigurationError",
    "DefaultExceptionMapper",
    "DownloadNotFoundError",
    "FormatterRegistry",
    "Pagination",
    "ProblemDetailsFactory",
    "ProblemRecord",
    "ResponseBuilder",
    "ResponseKit",
    "ResponseKitError",
    "SerializationError",
    "Settings",
    "StreamResponseBuilder",
    "default_registry",
]

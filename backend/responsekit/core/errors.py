"""
Library-level exceptions raised while building responses.

These exceptions describe failures of the response pipeline itself, not of
the host application. Application errors are never raised from here: they are
translated into RFC 9457 problem details by :mod:`responsekit.problems`.
"""

from __future__ import annotations

import os
from typing import Any


class ResponseKitError(Exception):
    """
    Base class for all errors raised by ``responsekit``.

    Notes
    -----
    - Subclasses are fatal to the current call only.
    - Nothing in the library retries after one of these.
    """

    pass


class ConfigurationError(ResponseKitError):
    """
    Raised when the library is wired inconsistently.

    Typical causes are a missing formatter for the content type a response
    must be rendered in, or invalid settings.

    :param message: Human-readable explanation.
    :type message: str
    :param details: Optional structured context (e.g. marshmallow messages).
    :type details: dict[str, Any] | None
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SerializationError(ResponseKitError):
    """Raised when a formatter cannot represent the payload it was given."""


class DownloadNotFoundError(ResponseKitError):
    """
    Raised when a file response points at a missing or unreadable path.

    The message names only the download; the server-side path is kept on
    :attr:`path` for logging and never reaches the problem body.

    :param path: Filesystem path that was requested.
    :type path: str
    :param download_name: Name offered to the client, the base name of
        ``path`` by default.
    :type download_name: str | None
    """

    def __init__(self, path: str, download_name: str | None = None) -> None:
        self.path = path
        self.download_name = download_name or os.path.basename(path)
        super().__init__(f"File not found or not readable: {self.download_name}")


__all__ = [
    "ResponseKitError",
    "ConfigurationError",
    "SerializationError",
    "DownloadNotFoundError",
]

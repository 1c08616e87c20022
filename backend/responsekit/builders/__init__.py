"""Response builders: envelopes, problems, streams and files."""

from __future__ import annotations

from .response import ResponseBuilder
from .stream import StreamResponseBuilder

__all__ = ["ResponseBuilder", "StreamResponseBuilder"]

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResponseFormatter(Protocol):
    """Port for serializers: payload in, text out, with a declared media type.

    ``content_type`` is the exact ``Content-Type`` header value the formatter
    wants emitted (it may carry parameters such as ``charset``); the registry
    keys formatters by its parameter-less, lowercased form.
    """

    content_type: str

    def format(self, payload: Any) -> str: ...

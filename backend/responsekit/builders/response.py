"""Envelope builder: payload + status + representation -> werkzeug response."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from http import HTTPStatus
from typing import Any

from werkzeug.wrappers import Response

from responsekit.core.config import Settings
from responsekit.core.errors import ConfigurationError
from responsekit.problems.mapper import ProblemRecord
from responsekit.registry import FormatterRegistry
from responsekit.support.content_type import ContentType
from responsekit.support.headers import Headers, HeaderValue, apply_headers


class ResponseBuilder:
    """Build complete HTTP responses around the standard envelopes.

    Parameters
    ----------
    registry:
        Formatters available for rendering bodies.
    settings:
        Resolved library settings; defaults to :class:`Settings` defaults.
    default_content_type:
        Representation used when a call passes no ``content_type``. Falls
        back to ``settings.default_content_type``. The Flask extension binds
        the per-request negotiated type here.
    response_class:
        Response type to instantiate (``flask.Response`` inside Flask apps).

    Notes
    -----
    The builder does not read the ``Accept`` header itself; negotiation is
    expected to have chosen ``default_content_type`` upstream.
    """

    def __init__(
        self,
        registry: FormatterRegistry,
        *,
        settings: Settings | None = None,
        default_content_type: str | None = None,
        response_class: type[Response] = Response,
    ) -> None:
        self.registry = registry
        self.settings = settings or Settings()
        self.default_content_type = default_content_type or self.settings.default_content_type
        self.response_class = response_class

    def with_content_type(self, content_type: str) -> ResponseBuilder:
        """Return a builder sharing this one's wiring but another default type."""

        return type(self)(
            self.registry,
            settings=self.settings,
            default_content_type=content_type,
            response_class=self.response_class,
        )

    def make(
        self,
        payload: Any,
        status: int = HTTPStatus.OK,
        content_type: str | None = None,
        headers: Mapping[str, HeaderValue] | None = None,
    ) -> Response:
        """Serialize ``payload`` and wrap it in a response.

        :param payload: Data handed to the formatter.
        :param status: HTTP status code.
        :param content_type: Explicit representation; the builder default
            applies when ``None``.
        :param headers: Extra headers. Sequence values are added one by one,
            scalar values replace; unsafe values are dropped. ``Content-Type``
            is always the formatter's own declaration.
        :raises ConfigurationError: No formatter is registered for the type.
        :raises SerializationError: The formatter rejected the payload.
        """

        effective = content_type or self.default_content_type
        formatter = self.registry.get(effective)
        if formatter is None:
            raise ConfigurationError(f"No formatter available for content type: {effective}")

        body = formatter.format(payload)
        response = self.response_class(body, status=int(status), content_type=formatter.content_type)
        if not _mentions(headers, Headers.CACHE_CONTROL):
            response.headers[Headers.CACHE_CONTROL] = self.settings.default_cache_control
        return apply_headers(response, headers)

    def success(self, data: Any = None, status: int = HTTPStatus.OK, content_type: str | None = None) -> Response:
        return self.make({"status": "success", "data": data}, status, content_type)

    def error(
        self,
        message: str,
        status: int = HTTPStatus.BAD_REQUEST,
        errors: Mapping[str, Any] | None = None,
        content_type: str | None = None,
    ) -> Response:
        """Envelope ``{"status": "error", "message": ..., "errors": ...}``; ``errors`` only when non-empty."""

        payload: dict[str, Any] = {"status": "error", "message": message}
        if errors:
            payload["errors"] = dict(errors)
        return self.make(payload, status, content_type)

    def paginated(
        self,
        items: Sequence[Any],
        total: int,
        page: int = 1,
        per_page: int | None = None,
        content_type: str | None = None,
    ) -> Response:
        """Envelope a page of ``items`` with ``meta`` describing the pagination.

        Inputs are clamped (``total >= 0``, ``page >= 1``, ``per_page >= 1``)
        and ``pages`` is ``ceil(total / per_page)``, or ``0`` for an empty
        collection. Always answers ``200``.
        """

        total = max(0, int(total))
        page = max(1, int(page))
        per_page = max(1, int(self.settings.default_per_page if per_page is None else per_page))
        pages = math.ceil(total / per_page) if total > 0 else 0
        payload = {
            "status": "success",
            "meta": {"total": total, "page": page, "per_page": per_page, "pages": pages},
            "data": list(items),
        }
        return self.make(payload, HTTPStatus.OK, content_type)

    def created(self, location: str, data: Any = None, content_type: str | None = None) -> Response:
        return self.make(
            {"status": "success", "data": data},
            HTTPStatus.CREATED,
            content_type,
            {Headers.LOCATION: str(location)},
        )

    def no_content(self) -> Response:
        """``204`` without body or ``Content-Type``, carrying only the default cache policy."""

        response = self.response_class(status=HTTPStatus.NO_CONTENT)
        response.headers.pop(Headers.CONTENT_TYPE, None)
        response.headers[Headers.CACHE_CONTROL] = self.settings.default_cache_control
        return response

    def problem(
        self,
        type: str,
        title: str,
        status: int,
        detail: str | None = None,
        instance: str | None = None,
        extensions: Mapping[str, Any] | None = None,
    ) -> Response:
        """Build an RFC 9457 ``application/problem+json`` response.

        Extension members are flattened next to the standard members instead
        of being nested.
        """

        record = ProblemRecord(
            type=type,
            title=title,
            status=int(status),
            detail=detail,
            instance=instance,
            extensions=dict(extensions or {}),
        )
        return self.make(record.to_payload(), record.status, ContentType.PROBLEM_JSON)


def _mentions(headers: Mapping[str, Any] | None, name: str) -> bool:
    return bool(headers) and any(key.lower() == name.lower() for key in headers)  # type: ignore[union-attr]


__all__ = ["ResponseBuilder"]

"""RFC 9457 problem responses assembled from raised errors."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from werkzeug.wrappers import Response

from responsekit.builders.response import ResponseBuilder
from responsekit.problems.mapper import DefaultExceptionMapper, ExceptionMapper
from responsekit.support.headers import is_safe

log = logging.getLogger(__name__)


class ProblemDetailsFactory:
    """
    Turn any error into an ``application/problem+json`` response.

    :param builder: Builder used to render the problem body.
    :type builder: ResponseBuilder
    :param mapper: Classifier; defaults to :class:`DefaultExceptionMapper`
        configured from ``builder.settings``.
    :type mapper: ExceptionMapper | None
    :param debug: Expose 5xx details and traces. Defaults to
        ``settings.dev_mode``.
    :type debug: bool | None
    :param trace_header: Header carrying ``error_ref``. Defaults to
        ``settings.trace_header``.
    :type trace_header: str | None
    :param include_trace_id: Emit the trace header at all. Defaults to
        ``settings.include_trace_id``.
    :type include_trace_id: bool | None
    """

    def __init__(
        self,
        builder: ResponseBuilder,
        mapper: ExceptionMapper | None = None,
        *,
        debug: bool | None = None,
        trace_header: str | None = None,
        include_trace_id: bool | None = None,
    ) -> None:
        settings = builder.settings
        self.builder = builder
        self.mapper = mapper or DefaultExceptionMapper.from_settings(settings)
        self.debug = settings.dev_mode if debug is None else debug
        self.trace_header = trace_header or settings.trace_header
        self.include_trace_id = settings.include_trace_id if include_trace_id is None else include_trace_id

    def from_exception(
        self,
        error: BaseException,
        instance: str | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> Response:
        """Classify ``error`` and render it.

        :param error: Error to report.
        :param instance: URI reference of this occurrence (e.g. the request path).
        :param extra: Additional extension members; they win over the
            classifier's on key conflicts.
        :returns: Problem response whose status is the classified status.
        """

        record = self.mapper.map(error, self.debug)
        if extra:
            record.extensions.update(extra)
        if instance is not None:
            record.instance = instance

        error_ref = record.extensions.get("error_ref")
        log_extra = {"error_ref": error_ref, "status": record.status}
        if record.status >= 500:
            log.error("Unhandled %s mapped to %s", type(error).__name__, record.status, exc_info=error, extra=log_extra)
        else:
            log.warning("%s mapped to %s %s", type(error).__name__, record.status, record.title, extra=log_extra)

        response = self.builder.problem(
            record.type,
            record.title,
            record.status,
            record.detail,
            record.instance,
            record.extensions,
        )
        if self.include_trace_id and error_ref is not None and is_safe(str(error_ref)):
            response.headers[self.trace_header] = str(error_ref)
        return response


__all__ = ["ProblemDetailsFactory"]

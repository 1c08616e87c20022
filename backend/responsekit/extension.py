"""Flask extension wiring negotiation, problem handling, logging and CLI."""

from __future__ import annotations

import logging
from http import HTTPStatus

from flask import Flask, g, has_request_context, request
from werkzeug.wrappers import Response

from responsekit.builders import ResponseBuilder, StreamResponseBuilder
from responsekit.core import logger as request_logging
from responsekit.core.config import Settings, as_bool
from responsekit.formatters import ProblemJsonFormatter
from responsekit.negotiation import AcceptHeaderNegotiator
from responsekit.pagination import Pagination, parse_pagination
from responsekit.problems.factory import ProblemDetailsFactory
from responsekit.problems.mapper import DefaultExceptionMapper, ExceptionMapper, HTTPExceptionRule
from responsekit.registry import FormatterRegistry, default_registry
from responsekit.support.content_type import ContentType
from responsekit.support.headers import Headers

log = logging.getLogger(__name__)

EXTENSION_KEY = "responsekit"
CONTENT_TYPE_KEY = "response_content_type"


class ResponseKit:
    """
    Response construction for a Flask application.

    Usage::

        kit = ResponseKit()

        def create_app():
            app = Flask(__name__)
            kit.init_app(app)
            return app

        @bp.get("/items")
        def list_items():
            page = kit.pagination_params()
            items, total = load_items(page.page, page.per_page)
            return kit.builder.paginated(items, total, page.page, page.per_page)

    :param app: Application to initialize immediately.
    :param registry: Formatters to offer; every built-in one by default.
    :param mapper: Exception classifier; by default the fixed-priority rules,
        preceded by a rule keeping werkzeug ``HTTPException`` statuses.
    :param settings: Explicit settings; read from ``app.config`` otherwise.
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        registry: FormatterRegistry | None = None,
        mapper: ExceptionMapper | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.negotiator = AcceptHeaderNegotiator()
        self._explicit_settings = settings
        self._explicit_mapper = mapper
        self.settings = settings or Settings()
        self.mapper: ExceptionMapper = mapper or self._default_mapper(self.settings)
        self.stream = StreamResponseBuilder()
        self._builder = ResponseBuilder(self.registry, settings=self.settings)
        if app is not None:
            self.init_app(app)

    @staticmethod
    def _default_mapper(settings: Settings) -> ExceptionMapper:
        return DefaultExceptionMapper.from_settings(settings, extra_rules=(HTTPExceptionRule(),))

    def init_app(self, app: Flask) -> None:
        """Bind the extension to ``app``.

        Parameters
        ----------
        app: flask.Flask
            Application receiving the negotiation hook, the ``Exception``
            error handler, the request-id logging hooks and the ``responses``
            CLI group.
        """

        self.settings = self._explicit_settings or Settings.from_object(app.config)
        self.mapper = self._explicit_mapper or self._default_mapper(self.settings)
        if ContentType.PROBLEM_JSON not in self.registry:
            self.registry.register(ProblemJsonFormatter())
        self._builder = ResponseBuilder(self.registry, settings=self.settings, response_class=app.response_class)
        self.stream = StreamResponseBuilder(app.response_class)

        app.extensions[EXTENSION_KEY] = self
        level = app.config.get("LOG_LEVEL")
        if as_bool(app.config.get("RESPONSES_CONFIGURE_LOGGING", False)):
            request_logging.configure_logging(str(level or "INFO"))
        if level:
            logging.getLogger(__package__).setLevel(str(level).upper())
        request_logging.init_app(app)
        app.before_request(self._negotiate)
        app.register_error_handler(Exception, self._handle_exception)

        from responsekit import cli

        cli.init_app(app)

    @property
    def builder(self) -> ResponseBuilder:
        """Builder defaulting to the content type negotiated for this request."""

        if has_request_context():
            negotiated = g.get(CONTENT_TYPE_KEY)
            if negotiated:
                return self._builder.with_content_type(negotiated)
        return self._builder

    @property
    def problems(self) -> ProblemDetailsFactory:
        return ProblemDetailsFactory(self.builder, self.mapper)

    def pagination_params(self) -> Pagination:
        """Parse ``page`` / ``per_page`` from the current query string."""

        return parse_pagination(request.args, self.settings)

    def _negotiate(self) -> Response | None:
        accept = request.headers.get(Headers.ACCEPT)
        chosen = self.negotiator.negotiate(accept, self.registry)
        if chosen is None and accept and accept.strip() and self.settings.strict_406:
            supported = ", ".join(self.registry.supported())
            log.info("Rejecting Accept %r", accept, extra={"status": HTTPStatus.NOT_ACCEPTABLE.value})
            return self._builder.response_class(
                f"Not Acceptable: Supported content types: {supported}",
                status=HTTPStatus.NOT_ACCEPTABLE,
                content_type=ContentType.TEXT,
            )
        setattr(g, CONTENT_TYPE_KEY, chosen or self.settings.default_content_type)
        return None

    def _handle_exception(self, error: Exception) -> Response:
        return self.problems.from_exception(error, instance=request.path)


__all__ = ["ResponseKit", "EXTENSION_KEY"]

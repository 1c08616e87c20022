"""Global pytest fixtures for the response toolkit."""

from __future__ import annotations

import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from flask import Flask

# Ensure the ``backend`` package is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "backend"))

from responsekit import ResponseBuilder, ResponseKit, Settings, default_registry  # noqa: E402
from responsekit.core.config import TestingConfig  # noqa: E402
from responsekit.registry import FormatterRegistry  # noqa: E402

from tests.helpers.app import register_demo_routes  # noqa: E402


@pytest.fixture()
def registry() -> FormatterRegistry:
    """Registry holding every built-in formatter."""

    return default_registry()


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def builder(registry: FormatterRegistry, settings: Settings) -> ResponseBuilder:
    """Framework-free builder rendering JSON by default."""

    return ResponseBuilder(registry, settings=settings)


def _make_app(**overrides: Any) -> Flask:
    app = Flask(__name__)
    app.config.from_object(TestingConfig)
    app.config.update(overrides)
    kit = ResponseKit(app)
    register_demo_routes(app, kit)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture()
def app() -> Generator[Flask, None, None]:
    """Create a Flask application wired with :class:`ResponseKit`.

    Returns
    -------
    Generator[Flask, None, None]
        Application with the demo routes from :mod:`tests.helpers.app`.
    """

    application = _make_app()
    with application.app_context():
        yield application


@pytest.fixture()
def strict_app() -> Flask:
    """Application answering ``406`` when negotiation fails."""

    return _make_app(RESPONSES_STRICT_406=True)


@pytest.fixture()
def dev_app() -> Flask:
    """Application running in dev mode (5xx details and traces exposed)."""

    return _make_app(RESPONSES_DEV_MODE=True)


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""

    return app.test_client()

"""Unit tests for :class:`responsekit.registry.FormatterRegistry`."""

from __future__ import annotations

from responsekit.formatters import JsonFormatter, TextFormatter
from responsekit.registry import FormatterRegistry, default_registry


class _UpperFormatter:
    content_type = "Application/JSON; charset=utf-8"

    def format(self, payload):
        return str(payload).upper()


class TestFormatterRegistry:
    def test_lookup_ignores_parameters_and_case(self):
        registry = FormatterRegistry([JsonFormatter()])

        assert isinstance(registry.get("application/json; charset=utf-8"), JsonFormatter)
        assert isinstance(registry.get("  APPLICATION/JSON "), JsonFormatter)

    def test_unknown_type_returns_none(self):
        registry = FormatterRegistry([JsonFormatter()])

        assert registry.get("application/xml") is None
        assert "application/xml" not in registry

    def test_text_formatter_is_keyed_without_charset(self):
        registry = FormatterRegistry([TextFormatter()])

        assert registry.supported() == ["text/plain"]

    def test_registering_same_type_overwrites_and_keeps_position(self):
        # Arrange
        registry = FormatterRegistry([JsonFormatter(), TextFormatter()])
        replacement = _UpperFormatter()

        # Act
        registry.register(replacement)

        # Assert
        assert registry.get("application/json") is replacement
        assert registry.supported() == ["application/json", "text/plain"]
        assert len(registry) == 2

    def test_iteration_yields_pairs_in_order(self):
        registry = FormatterRegistry([TextFormatter(), JsonFormatter()])

        assert [key for key, _ in registry] == ["text/plain", "application/json"]


def test_default_registry_order() -> None:
    """Built-in formatters are registered JSON first."""

    assert default_registry().supported() == [
        "application/json",
        "text/plain",
        "application/x-ndjson",
        "text/csv",
        "application/problem+json",
        "application/xml",
    ]

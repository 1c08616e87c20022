"""Unit tests for settings resolution."""

from __future__ import annotations

import pytest

from responsekit.core import config as config_module
from responsekit.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    Settings,
    TestingConfig,
    as_bool,
    env_bool,
    env_int,
    get_config,
)
from responsekit.core.errors import ConfigurationError


class TestSettingsFromOptions:
    def test_defaults(self):
        assert Settings.from_options({}) == Settings()

    def test_nested_sections(self):
        # Arrange
        options = {
            "default_content_type": "application/xml",
            "dev_mode": True,
            "cache_control_default": "private, max-age=60",
            "negotiation": {"strict_406": True},
            "problem": {"include_trace_id": False, "trace_header": "X-Error-Ref", "base_uri": "https://errors.example/"},
            "pagination": {"max_per_page": 50},
            "unknown_key": "ignored",
        }

        # Act
        settings = Settings.from_options(options)

        # Assert
        assert settings.default_content_type == "application/xml"
        assert settings.dev_mode is True
        assert settings.default_cache_control == "private, max-age=60"
        assert settings.strict_406 is True
        assert settings.include_trace_id is False
        assert settings.trace_header == "X-Error-Ref"
        assert settings.problem_base_uri == "https://errors.example/"
        assert settings.default_problem_type == "about:blank"
        assert settings.max_per_page == 50
        assert settings.default_per_page == 20

    def test_invalid_options_raise_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_options({"pagination": {"max_per_page": 0}, "dev_mode": "maybe"})

        details = exc_info.value.details
        assert "dev_mode" in details
        assert "max_per_page" in details["pagination"]


class TestSettingsFromObject:
    def test_reads_prefixed_keys_from_mapping(self):
        settings = Settings.from_object({"RESPONSES_STRICT_406": True, "RESPONSES_MAX_PER_PAGE": "30", "OTHER": 1})

        assert settings.strict_406 is True
        assert settings.max_per_page == 30
        assert settings.default_content_type == "application/json"

    def test_reads_config_class_attributes(self):
        assert Settings.from_object(TestingConfig).dev_mode is False
        assert Settings.from_object(ProductionConfig).dev_mode is False

    def test_string_flags_are_parsed(self):
        settings = Settings.from_object(
            {"RESPONSES_DEV_MODE": "false", "RESPONSES_INCLUDE_TRACE_ID": "0", "RESPONSES_STRICT_406": "yes"}
        )

        assert settings.dev_mode is False
        assert settings.include_trace_id is False
        assert settings.strict_406 is True


@pytest.mark.parametrize(("value", "expected"), [("Off", False), (" ON ", True), (0, False), (1, True), (None, False)])
def test_as_bool(value, expected) -> None:
    assert as_bool(value) is expected


def test_replace_returns_new_instance() -> None:
    original = Settings()

    changed = original.replace(dev_mode=True)

    assert changed.dev_mode is True
    assert original.dev_mode is False


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("Yes", True), ("on", True), ("0", False), ("off", False), ("", False)],
)
def test_env_bool(monkeypatch, value, expected) -> None:
    monkeypatch.setenv("RESPONSES_FLAG", value)

    assert env_bool("RESPONSES_FLAG") is expected


def test_env_bool_default_when_unset(monkeypatch) -> None:
    monkeypatch.delenv("RESPONSES_FLAG", raising=False)

    assert env_bool("RESPONSES_FLAG", True) is True


def test_env_int(monkeypatch) -> None:
    monkeypatch.setenv("RESPONSES_SIZE", "42")
    assert env_int("RESPONSES_SIZE", 1) == 42

    monkeypatch.setenv("RESPONSES_SIZE", "many")
    with pytest.raises(ConfigurationError):
        env_int("RESPONSES_SIZE", 1)


@pytest.mark.parametrize(
    ("env", "expected"),
    [("testing", TestingConfig), ("PRODUCTION", ProductionConfig), ("staging", DevelopmentConfig)],
)
def test_get_config_selects_class(monkeypatch, env, expected) -> None:
    monkeypatch.setenv(config_module.ENV_VAR, env)

    assert get_config() is expected

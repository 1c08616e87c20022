"""Response settings with environment-based simple classes."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

from dotenv import load_dotenv
from marshmallow import EXCLUDE, Schema, ValidationError, fields, pre_load, validate

from responsekit.core.errors import ConfigurationError

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

CONFIG_PREFIX: Final[str] = "RESPONSES_"
TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})


# Load .env during development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return as_bool(val)


def as_bool(value: Any) -> bool:
    """Coerce a config value to ``bool``; strings use the same words as :func:`env_bool`."""
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY
    return bool(value)


def env_int(name: str, default: int) -> int:
    """Parse an integer environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {val!r}") from exc


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    RESPONSES_DEFAULT_CONTENT_TYPE: str
        Representation used when the request expresses no preference.
    RESPONSES_DEV_MODE: bool
        Exposes ``detail`` and stack traces on 5xx problem responses.
    RESPONSES_CACHE_CONTROL: str
        ``Cache-Control`` value applied unless a response sets its own.
    RESPONSES_STRICT_406: bool
        Answer ``406 Not Acceptable`` when negotiation finds no match instead
        of falling back to the default content type.
    RESPONSES_INCLUDE_TRACE_ID: bool
        Echo the problem ``error_ref`` in the trace header.
    RESPONSES_TRACE_HEADER: str
        Name of the trace header.
    RESPONSES_DEFAULT_PROBLEM_TYPE: str
        ``type`` member for problems no rule recognizes.
    RESPONSES_PROBLEM_BASE_URI: str
        Prefix for the ``type`` URIs of recognized problems.
    RESPONSES_MAX_PER_PAGE: int
        Upper bound for the ``per_page`` query argument.
    RESPONSES_DEFAULT_PER_PAGE: int
        Page size used when none is requested.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    RESPONSES_CONFIGURE_LOGGING: bool
        Install the JSON stdout handler on the root logger at ``init_app``
        time. Off by default so host applications keep their own handlers.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    RESPONSES_DEFAULT_CONTENT_TYPE = os.getenv("RESPONSES_DEFAULT_CONTENT_TYPE", "application/json")
    RESPONSES_DEV_MODE = env_bool("RESPONSES_DEV_MODE", False)
    RESPONSES_CACHE_CONTROL = os.getenv("RESPONSES_CACHE_CONTROL", "no-store")

    # Negotiation
    RESPONSES_STRICT_406 = env_bool("RESPONSES_STRICT_406", False)

    # Problem details
    RESPONSES_INCLUDE_TRACE_ID = env_bool("RESPONSES_INCLUDE_TRACE_ID", True)
    RESPONSES_TRACE_HEADER = os.getenv("RESPONSES_TRACE_HEADER", "X-Trace-Id")
    RESPONSES_DEFAULT_PROBLEM_TYPE = os.getenv("RESPONSES_DEFAULT_PROBLEM_TYPE", "about:blank")
    RESPONSES_PROBLEM_BASE_URI = os.getenv("RESPONSES_PROBLEM_BASE_URI", "https://problem/")

    # Pagination
    RESPONSES_MAX_PER_PAGE = env_int("RESPONSES_MAX_PER_PAGE", 100)
    RESPONSES_DEFAULT_PER_PAGE = env_int("RESPONSES_DEFAULT_PER_PAGE", 20)

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    RESPONSES_CONFIGURE_LOGGING = env_bool("RESPONSES_CONFIGURE_LOGGING", False)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Turns on dev mode so server errors carry their message and a trace.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    RESPONSES_DEV_MODE = env_bool("RESPONSES_DEV_MODE", True)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and keeps dev mode off so tests see production
      problem payloads.
    - Lets exceptions reach the extension's problem handler.
    """

    TESTING = True
    DEBUG = False
    RESPONSES_DEV_MODE = False
    PROPAGATE_EXCEPTIONS = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Dev mode is never enabled here, whatever the environment says.
    """

    DEBUG = False
    RESPONSES_DEV_MODE = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


class _NegotiationOptions(Schema):
    strict_406 = fields.Bool(load_default=False)


class _ProblemOptions(Schema):
    include_trace_id = fields.Bool(load_default=True)
    trace_header = fields.String(load_default="X-Trace-Id", validate=validate.Length(min=1))
    default_type = fields.String(load_default="about:blank", validate=validate.Length(min=1))
    base_uri = fields.String(load_default="https://problem/")


class _PaginationOptions(Schema):
    max_per_page = fields.Int(load_default=100, validate=validate.Range(min=1))
    default_per_page = fields.Int(load_default=20, validate=validate.Range(min=1))


class SettingsSchema(Schema):
    """Validate the nested option mapping accepted by :meth:`Settings.from_options`."""

    class Meta:
        unknown = EXCLUDE

    default_content_type = fields.String(load_default="application/json", validate=validate.Length(min=1))
    dev_mode = fields.Bool(load_default=False)
    cache_control_default = fields.String(load_default="no-store")
    negotiation = fields.Nested(_NegotiationOptions)
    problem = fields.Nested(_ProblemOptions)
    pagination = fields.Nested(_PaginationOptions)

    @pre_load
    def _fill_sections(self, data: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
        # Missing sections still go through their schema to pick up defaults.
        return {"negotiation": {}, "problem": {}, "pagination": {}, **data}


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Resolved, immutable settings consumed by the builders and the extension.

    :param default_content_type: Content type used when nothing else decides.
    :param dev_mode: Expose 5xx details and traces in problem responses.
    :param default_cache_control: ``Cache-Control`` applied by default.
    :param strict_406: Reject unacceptable requests with ``406``.
    :param include_trace_id: Send ``error_ref`` in :attr:`trace_header`.
    :param trace_header: Header carrying the error reference.
    :param default_problem_type: ``type`` of unrecognized problems.
    :param problem_base_uri: Prefix of recognized problem ``type`` URIs.
    :param max_per_page: Upper bound for requested page sizes.
    :param default_per_page: Page size when none is requested.
    """

    default_content_type: str = "application/json"
    dev_mode: bool = False
    default_cache_control: str = "no-store"
    strict_406: bool = False
    include_trace_id: bool = True
    trace_header: str = "X-Trace-Id"
    default_problem_type: str = "about:blank"
    problem_base_uri: str = "https://problem/"
    max_per_page: int = 100
    default_per_page: int = 20

    @classmethod
    def from_object(cls, source: Mapping[str, Any] | object) -> Settings:
        """Read ``RESPONSES_*`` keys from a mapping (e.g. ``app.config``) or a config class."""

        def lookup(key: str, default: Any) -> Any:
            name = CONFIG_PREFIX + key
            if isinstance(source, Mapping):
                return source.get(name, default)
            return getattr(source, name, default)

        defaults = cls()
        return cls(
            default_content_type=lookup("DEFAULT_CONTENT_TYPE", defaults.default_content_type),
            dev_mode=as_bool(lookup("DEV_MODE", defaults.dev_mode)),
            default_cache_control=lookup("CACHE_CONTROL", defaults.default_cache_control),
            strict_406=as_bool(lookup("STRICT_406", defaults.strict_406)),
            include_trace_id=as_bool(lookup("INCLUDE_TRACE_ID", defaults.include_trace_id)),
            trace_header=lookup("TRACE_HEADER", defaults.trace_header),
            default_problem_type=lookup("DEFAULT_PROBLEM_TYPE", defaults.default_problem_type),
            problem_base_uri=lookup("PROBLEM_BASE_URI", defaults.problem_base_uri),
            max_per_page=int(lookup("MAX_PER_PAGE", defaults.max_per_page)),
            default_per_page=int(lookup("DEFAULT_PER_PAGE", defaults.default_per_page)),
        )

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> Settings:
        """Build settings from the nested option mapping.

        Raises
        ------
        ConfigurationError
            When ``options`` fails :class:`SettingsSchema` validation; the
            marshmallow messages are kept in ``details``.
        """

        try:
            data = SettingsSchema().load(dict(options))
        except ValidationError as err:
            raise ConfigurationError("Invalid response settings", details=err.normalized_messages()) from err
        return cls(
            default_content_type=data["default_content_type"],
            dev_mode=data["dev_mode"],
            default_cache_control=data["cache_control_default"],
            strict_406=data["negotiation"]["strict_406"],
            include_trace_id=data["problem"]["include_trace_id"],
            trace_header=data["problem"]["trace_header"],
            default_problem_type=data["problem"]["default_type"],
            problem_base_uri=data["problem"]["base_uri"],
            max_per_page=data["pagination"]["max_per_page"],
            default_per_page=data["pagination"]["default_per_page"],
        )

    def replace(self, **changes: Any) -> Settings:
        """Return a copy with ``changes`` applied."""

        return dataclasses.replace(self, **changes)


__all__ = [
    "ENV_VAR",
    "BaseConfig",
    "DevelopmentConfig",
    "TestingConfig",
    "ProductionConfig",
    "CONFIG_MAP",
    "Settings",
    "SettingsSchema",
    "as_bool",
    "env_bool",
    "env_int",
    "get_config",
]

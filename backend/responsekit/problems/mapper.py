"""
Classification of raised errors into RFC 9457 problem records.

The mapper walks an ordered list of rules and stops at the first one whose
predicate accepts the error; anything unrecognized becomes a ``500``. Rules
only look at the error's class name (or at builtin types), so the library
needs no import-time knowledge of the host application's exceptions.
"""

from __future__ import annotations

import secrets
import traceback
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, ClassVar, Protocol, cast, runtime_checkable

from werkzeug.exceptions import HTTPException

from responsekit.core.config import Settings
from responsekit.support.data import to_plain

TRACE_LINES = 15
BUILTINS_MODULE = "builtins"


@dataclass(slots=True)
class ProblemRecord:
    """
    Structured problem detail produced for a single error.

    :param type: URI reference identifying the problem type.
    :param title: Short, human-readable summary of the problem type.
    :param status: HTTP status code.
    :param detail: Occurrence-specific explanation, ``None`` when suppressed.
    :param instance: URI reference identifying this occurrence.
    :param extensions: Extra members, flattened into the payload on the wire.
    """

    RESERVED: ClassVar[tuple[str, ...]] = ("type", "title", "status", "detail", "instance")

    type: str
    title: str
    status: int
    detail: str | None = None
    instance: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Return the RFC 9457 wire mapping.

        ``detail`` and ``instance`` are omitted when unset; extension members
        sit at the top level and never override the standard members.
        """

        payload: dict[str, Any] = {"type": self.type, "title": self.title, "status": self.status}
        if self.detail is not None:
            payload["detail"] = self.detail
        if self.instance is not None:
            payload["instance"] = self.instance
        for key, value in self.extensions.items():
            if key not in self.RESERVED:
                payload[key] = value
        return payload


@runtime_checkable
class HasValidationErrors(Protocol):
    """Capability of errors that carry field-level validation messages."""

    def errors(self) -> Mapping[str, Any]: ...


# Conventional accessors tried when an error lacks ``errors()``; the last two
# are what marshmallow's ValidationError exposes.
FALLBACK_ACCESSORS = ("get_errors", "normalized_messages", "messages")


def validation_errors(error: BaseException) -> Any:
    """Extract validation messages from ``error`` or return an empty dict."""

    if isinstance(error, HasValidationErrors) and callable(error.errors):
        found = error.errors()
        if found:
            return to_plain(found)
    for name in FALLBACK_ACCESSORS:
        accessor = getattr(error, name, None)
        if accessor is None:
            continue
        found = accessor() if callable(accessor) else accessor
        if found:
            return to_plain(found)
    return {}


def name_contains(fragment: str, *, excluding: str | None = None) -> Callable[[BaseException], bool]:
    """Build a predicate matching errors whose class name contains ``fragment``.

    Builtin exceptions never match: ``FileNotFoundError`` or
    ``ModuleNotFoundError`` are server faults and stay on the 500 default.
    """

    def predicate(error: BaseException) -> bool:
        if type(error).__module__ == BUILTINS_MODULE:
            return False
        name = type(error).__name__
        if excluding is not None and excluding in name:
            return False
        return fragment in name

    return predicate


def is_instance_of(*types: type[BaseException]) -> Callable[[BaseException], bool]:
    def predicate(error: BaseException) -> bool:
        return isinstance(error, types)

    return predicate


class Rule(Protocol):
    """A classification step: accept an error, then describe it."""

    def matches(self, error: BaseException) -> bool: ...

    def resolve(self, error: BaseException, base_uri: str) -> ProblemRecord: ...


@dataclass(frozen=True, slots=True)
class ProblemRule:
    """Rule pairing a predicate with a fixed problem template."""

    predicate: Callable[[BaseException], bool]
    slug: str
    title: str
    status: int
    extensions: Callable[[BaseException], dict[str, Any]] | None = None

    def matches(self, error: BaseException) -> bool:
        return self.predicate(error)

    def resolve(self, error: BaseException, base_uri: str) -> ProblemRecord:
        extensions = dict(self.extensions(error)) if self.extensions else {}
        return ProblemRecord(
            type=f"{base_uri}{self.slug}",
            title=self.title,
            status=int(self.status),
            extensions=extensions,
        )


class HTTPExceptionRule:
    """Keep the status, name and description of werkzeug ``HTTPException``s."""

    def matches(self, error: BaseException) -> bool:
        return isinstance(error, HTTPException) and error.code is not None

    def resolve(self, error: BaseException, base_uri: str) -> ProblemRecord:
        http_error = cast(HTTPException, error)
        status = int(http_error.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        return ProblemRecord(
            type="about:blank",
            title=(http_error.name or HTTPStatus(status).phrase).strip(),
            status=status,
            detail=http_error.description,
        )


DEFAULT_RULES: tuple[ProblemRule, ...] = (
    ProblemRule(is_instance_of(ValueError), "domain-error", "Domain Error", HTTPStatus.BAD_REQUEST),
    ProblemRule(
        name_contains("Auth", excluding="Authorization"),
        "auth-required",
        "Authentication Required",
        HTTPStatus.UNAUTHORIZED,
    ),
    ProblemRule(name_contains("Authorization"), "not-allowed", "Forbidden", HTTPStatus.FORBIDDEN),
    ProblemRule(name_contains("NotFound"), "not-found", "Not Found", HTTPStatus.NOT_FOUND),
    ProblemRule(
        name_contains("Validation"),
        "validation-error",
        "Validation Failed",
        HTTPStatus.UNPROCESSABLE_ENTITY,
        extensions=lambda error: {"errors": validation_errors(error)},
    ),
)


class ExceptionMapper(Protocol):
    """Port for turning an error into a :class:`ProblemRecord`."""

    def map(self, error: BaseException, debug: bool = False) -> ProblemRecord: ...


def new_error_ref() -> str:
    """Return a fresh 16 hex character correlation token."""

    return secrets.token_hex(8)


def format_trace(error: BaseException) -> dict[str, Any]:
    """Summarize where ``error`` was raised, keeping the first traceback lines."""

    frames = traceback.extract_tb(error.__traceback__)
    origin = frames[-1] if frames else None
    lines = "".join(traceback.format_exception(error)).splitlines()
    return {
        "message": str(error),
        "file": origin.filename if origin else None,
        "line": origin.lineno if origin else None,
        "trace": lines[:TRACE_LINES],
    }


class DefaultExceptionMapper:
    """Fixed-priority classifier; the first matching rule wins.

    Parameters
    ----------
    base_type_uri:
        Prefix for the ``type`` of recognized problems; a trailing slash is
        enforced.
    default_type:
        ``type`` of problems no rule recognizes.
    extra_rules:
        Rules evaluated *before* the built-in list, for host-specific errors.
    rules:
        Replacement for the built-in list.

    Notes
    -----
    - ``detail`` is the error message, except for ``5xx`` outside debug mode.
    - Debug mode adds a ``trace`` extension.
    - Every record gets a fresh ``error_ref`` extension.
    """

    def __init__(
        self,
        base_type_uri: str = "https://problem/",
        *,
        default_type: str = "about:blank",
        extra_rules: Iterable[Rule] = (),
        rules: Iterable[Rule] | None = None,
    ) -> None:
        self.base_type_uri = base_type_uri.rstrip("/") + "/" if base_type_uri else ""
        self.default_type = default_type
        self.rules: list[Rule] = [*extra_rules, *(DEFAULT_RULES if rules is None else rules)]

    @classmethod
    def from_settings(cls, settings: Settings, *, extra_rules: Iterable[Rule] = ()) -> DefaultExceptionMapper:
        return cls(
            settings.problem_base_uri,
            default_type=settings.default_problem_type,
            extra_rules=extra_rules,
        )

    def classify(self, error: BaseException) -> ProblemRecord:
        """Apply the rules only, without detail/trace/reference post-processing."""

        for rule in self.rules:
            if rule.matches(error):
                return rule.resolve(error, self.base_type_uri)
        return ProblemRecord(
            type=self.default_type,
            title="Internal Server Error",
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
        )

    def map(self, error: BaseException, debug: bool = False) -> ProblemRecord:
        record = self.classify(error)
        record.status = int(record.status)
        if record.detail is None:
            record.detail = str(error) or None
        if record.status >= 500 and not debug:
            record.detail = None
        if debug:
            record.extensions["trace"] = format_trace(error)
        record.extensions["error_ref"] = new_error_ref()
        return record


__all__ = [
    "DEFAULT_RULES",
    "DefaultExceptionMapper",
    "ExceptionMapper",
    "HTTPExceptionRule",
    "HasValidationErrors",
    "ProblemRecord",
    "ProblemRule",
    "Rule",
    "format_trace",
    "name_contains",
    "new_error_ref",
    "validation_errors",
]

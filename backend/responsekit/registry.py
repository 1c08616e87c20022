"""Registry of response formatters keyed by normalized content type."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from responsekit.formatters import ResponseFormatter, builtin_formatters
from responsekit.support.content_type import base_type

log = logging.getLogger(__name__)


class FormatterRegistry:
    """Lookup table from content type to formatter.

    Keys are normalized with :func:`responsekit.support.content_type.base_type`
    on both registration and lookup, so ``"application/json; charset=utf-8"``
    resolves to the formatter registered for ``application/json``.

    Notes
    -----
    - Registering a second formatter for the same key replaces the first one;
      the key keeps its original position in :meth:`supported`.
    - The registry is meant to be filled at startup and only read afterwards,
      which makes concurrent lookups safe without locking.
    """

    def __init__(self, formatters: Iterable[ResponseFormatter] = ()) -> None:
        self._formatters: dict[str, ResponseFormatter] = {}
        for formatter in formatters:
            self.register(formatter)

    def register(self, formatter: ResponseFormatter) -> None:
        """Store ``formatter`` under its normalized content type."""

        key = base_type(formatter.content_type)
        if key in self._formatters:
            log.debug("Replacing formatter for %s with %r", key, formatter)
        else:
            log.debug("Registered formatter %r for %s", formatter, key)
        self._formatters[key] = formatter

    def get(self, content_type: str) -> ResponseFormatter | None:
        """Return the formatter for ``content_type`` or ``None`` when unregistered."""

        return self._formatters.get(base_type(content_type))

    def supported(self) -> list[str]:
        """Return registered content types in registration order."""

        return list(self._formatters)

    def __contains__(self, content_type: object) -> bool:
        return isinstance(content_type, str) and base_type(content_type) in self._formatters

    def __len__(self) -> int:
        return len(self._formatters)

    def __iter__(self) -> Iterator[tuple[str, ResponseFormatter]]:
        return iter(self._formatters.items())

    def __repr__(self) -> str:
        return f"FormatterRegistry({self.supported()!r})"


def default_registry() -> FormatterRegistry:
    """Build a registry holding every built-in formatter, JSON first."""

    return FormatterRegistry(builtin_formatters())


__all__ = ["FormatterRegistry", "default_registry"]

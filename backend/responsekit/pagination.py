"""Query-string pagination arguments."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load

from responsekit.core.config import Settings


@dataclass(frozen=True, slots=True)
class Pagination:
    """Container holding pagination arguments parsed from the request."""

    page: int
    per_page: int


class PaginationQuerySchema(Schema):
    """Parse ``page`` / ``per_page`` and clamp them into the allowed window.

    Out-of-range numbers are clamped rather than rejected; non-numeric values
    still raise :class:`marshmallow.ValidationError`.
    """

    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=1)
    per_page = fields.Integer()

    def __init__(self, *, default_per_page: int = 20, max_per_page: int = 100, **kwargs: Any) -> None:
        self._default_per_page = default_per_page
        self._max_per_page = max_per_page
        super().__init__(**kwargs)

    @post_load
    def clamp(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        data["page"] = max(data.get("page", 1), 1)
        per_page = data.get("per_page", self._default_per_page)
        data["per_page"] = min(max(per_page, 1), self._max_per_page)
        return data


def parse_pagination(args: Mapping[str, Any], settings: Settings | None = None) -> Pagination:
    """Load pagination arguments from ``args`` (usually ``request.args``)."""

    settings = settings or Settings()
    schema = PaginationQuerySchema(
        default_per_page=settings.default_per_page,
        max_per_page=settings.max_per_page,
    )
    data = schema.load(args)
    return Pagination(page=data["page"], per_page=data["per_page"])


__all__ = ["Pagination", "PaginationQuerySchema", "parse_pagination"]

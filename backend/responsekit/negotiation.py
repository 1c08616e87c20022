"""Content negotiation driven by the ``Accept`` request header (RFC 7231)."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from responsekit.registry import FormatterRegistry

log = logging.getLogger(__name__)

WILDCARD = "*"
_QUALITY = re.compile(r"^q=([0-9]*\.?[0-9]+)$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class MediaTypeRange:
    """
    One parsed entry of an ``Accept`` header.

    :param type: Top-level type, ``"*"`` for any.
    :type type: str
    :param subtype: Subtype, ``"*"`` for any.
    :type subtype: str
    :param quality: Relative preference in ``[0.0, 1.0]``.
    :type quality: float
    """

    type: str
    subtype: str
    quality: float = 1.0

    @property
    def full(self) -> str:
        return f"{self.type}/{self.subtype}" if self.subtype else self.type

    @property
    def is_wildcard(self) -> bool:
        """``True`` for ``*/*`` and ``type/*`` ranges."""
        return self.subtype == WILDCARD

    @property
    def accepts_anything(self) -> bool:
        return self.type == WILDCARD and self.subtype == WILDCARD

    def matches(self, content_type: str) -> bool:
        """Check whether a registered (normalized) content type falls in this range."""

        if self.accepts_anything:
            return True
        if self.is_wildcard:
            return content_type.split("/", 1)[0] == self.type
        return content_type == self.full


def parse_quality(params: list[str]) -> float:
    """Return the ``q`` weight found in ``params``, ``1.0`` when absent or malformed."""

    for param in params:
        match = _QUALITY.match(param.strip())
        if match:
            return max(0.0, min(1.0, float(match.group(1))))
    return 1.0


def parse_accept_header(header: str) -> list[MediaTypeRange]:
    """Parse ``header`` into media ranges ordered by quality, highest first.

    Parameters
    ----------
    header:
        Raw ``Accept`` header value.

    Returns
    -------
    list[MediaTypeRange]
        Ranges sorted by descending quality; ties keep the order in which they
        appear in the header.

    Notes
    -----
    A media range listed twice keeps the quality of its *last* occurrence but
    the position of its first one. This is a one-pass simplification of RFC
    7231, which leaves duplicate handling to the server.
    """

    qualities: dict[str, float] = {}
    for part in header.split(","):
        segments = part.strip().split(";")
        media = segments[0].strip().lower()
        if not media:
            continue
        qualities[media] = parse_quality(segments[1:])

    ranges = []
    for media, quality in qualities.items():
        type_, _, subtype = media.partition("/")
        ranges.append(MediaTypeRange(type_, subtype, quality))
    return sorted(ranges, key=lambda r: r.quality, reverse=True)


class AcceptHeaderNegotiator:
    """Pick the best registered content type for an ``Accept`` header.

    The negotiator never raises: a miss is reported as ``None`` and the caller
    decides between a default representation and ``406 Not Acceptable``.
    """

    def negotiate(self, accept_header: str | None, registry: FormatterRegistry) -> str | None:
        if not accept_header or not accept_header.strip():
            return None

        ranges = parse_accept_header(accept_header)
        supported = registry.supported()

        # An unqualified "accept anything" means the server's preferred format.
        if any(r.accepts_anything and r.quality == 1.0 for r in ranges):
            chosen = supported[0] if supported else None
            log.debug("Negotiated %s for Accept %r (wildcard)", chosen, accept_header, extra={"content_type": chosen})
            return chosen

        for media_range in ranges:
            if media_range.quality <= 0.0:
                continue
            for content_type in supported:
                if media_range.matches(content_type):
                    log.debug(
                        "Negotiated %s for Accept %r",
                        content_type,
                        accept_header,
                        extra={"content_type": content_type},
                    )
                    return content_type

        log.debug("No acceptable content type for Accept %r", accept_header)
        return None


__all__ = ["MediaTypeRange", "AcceptHeaderNegotiator", "parse_accept_header", "parse_quality"]

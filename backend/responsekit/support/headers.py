"""Header name constants and helpers for safe header handling."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Final
from urllib.parse import quote

from werkzeug.wrappers import Response

log = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[\r\n]")
_NON_PRINTABLE_ASCII = re.compile(r"[^\x20-\x7e]")

HeaderValue = str | int | Iterable[str]


class Headers:
    """Header names used by the builders."""

    CONTENT_TYPE: Final[str] = "Content-Type"
    CONTENT_LENGTH: Final[str] = "Content-Length"
    CONTENT_DISPOSITION: Final[str] = "Content-Disposition"
    CACHE_CONTROL: Final[str] = "Cache-Control"
    LOCATION: Final[str] = "Location"
    ACCEPT: Final[str] = "Accept"
    REQUEST_ID: Final[str] = "X-Request-ID"


def is_safe(value: str) -> bool:
    """Return ``True`` when ``value`` carries no CR/LF (header injection)."""

    return _UNSAFE.search(value) is None


def content_disposition(filename: str, *, inline: bool = False) -> str:
    """Build an RFC 6266 ``Content-Disposition`` value.

    Parameters
    ----------
    filename:
        Name offered to the client.
    inline:
        Use ``inline`` instead of ``attachment``.

    Returns
    -------
    str
        ``attachment; filename="report.pdf"`` for plain ASCII names. Names with
        non-ASCII (or non-printable) characters get an ASCII fallback in
        ``filename`` plus ``filename*=UTF-8''<percent-encoded>``.
    """

    disposition = "inline" if inline else "attachment"
    ascii_name = _NON_PRINTABLE_ASCII.sub("_", filename)
    quoted = ascii_name.replace("\\", "\\\\").replace('"', '\\"')
    value = f'{disposition}; filename="{quoted}"'
    if ascii_name != filename:
        value += f"; filename*=UTF-8''{quote(filename, safe='')}"
    return value


def cache_control(
    max_age: int | None = None,
    *,
    public: bool = False,
    no_store: bool = False,
    must_revalidate: bool = False,
) -> str:
    """Compose a ``Cache-Control`` value for the common cases."""

    if no_store:
        return "no-store"
    directives = ["public" if public else "private"]
    if max_age is not None:
        directives.append(f"max-age={max_age}")
    if must_revalidate:
        directives.append("must-revalidate")
    return ", ".join(directives)


def apply_headers(
    response: Response,
    headers: Mapping[str, HeaderValue] | None,
    *,
    skip: Iterable[str] = (Headers.CONTENT_TYPE,),
) -> Response:
    """Merge caller headers into ``response``.

    List or tuple values are added one by one, scalar values replace any
    existing header. Values containing CR/LF are dropped and logged; names in
    ``skip`` (case-insensitive) are ignored.
    """

    if not headers:
        return response
    skipped = {name.lower() for name in skip}
    for name, value in headers.items():
        if name.lower() in skipped:
            continue
        if not is_safe(name):
            log.warning("Dropped header with unsafe name %r", name)
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                if is_safe(str(item)):
                    response.headers.add(name, str(item))
                else:
                    log.warning("Dropped unsafe value for header %s", name)
        elif is_safe(str(value)):
            response.headers.set(name, str(value))
        else:
            log.warning("Dropped unsafe value for header %s", name)
    return response


__all__ = [
    "Headers",
    "HeaderValue",
    "is_safe",
    "content_disposition",
    "cache_control",
    "apply_headers",
]

"""HTTP helper utilities for tests."""

from __future__ import annotations

from urllib.parse import urlencode


def accept(*media_types: str) -> dict[str, str]:
    """Return an ``Accept`` header listing ``media_types`` in order.

    Parameters
    ----------
    *media_types:
        Media ranges, optionally carrying a ``;q=`` parameter.

    Returns
    -------
    dict[str, str]
        HTTP headers dictionary.
    """

    return {"Accept": ", ".join(media_types)}


def build_url(path: str, **query: str | int | float) -> str:
    """Build a URL with encoded query parameters.

    Parameters
    ----------
    path:
        Base path of the endpoint.
    **query:
        Query parameters to append.

    Returns
    -------
    str
        Final URL string including encoded query string.
    """

    qs = urlencode({k: v for k, v in query.items() if v is not None})
    return f"{path}?{qs}" if qs else path

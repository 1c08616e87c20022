"""Assertion helper utilities for tests."""

from __future__ import annotations

import json

PROBLEM_MEMBERS = {"type", "title", "status"}


def assert_json_keys(data: dict, required: set[str]) -> None:
    """Ensure that all required keys are present in ``data``.

    Parameters
    ----------
    data:
        JSON object under test.
    required:
        Set of required keys that must exist in ``data``.

    Raises
    ------
    AssertionError
        If any required key is missing.
    """

    missing = required - data.keys()
    assert not missing, f"Missing keys: {', '.join(sorted(missing))}"


def assert_pagination(obj: dict) -> None:
    """Validate a standard pagination envelope.

    Parameters
    ----------
    obj:
        JSON object representing a paginated response.
    """

    assert_json_keys(obj, {"status", "meta", "data"})
    assert_json_keys(obj["meta"], {"total", "page", "per_page", "pages"})
    assert isinstance(obj["data"], list)


def problem_body(response) -> dict:
    """Decode and sanity-check an ``application/problem+json`` response.

    Returns
    -------
    dict
        The decoded problem object.
    """

    assert response.headers["Content-Type"] == "application/problem+json"
    body = json.loads(response.get_data(as_text=True))
    assert_json_keys(body, PROBLEM_MEMBERS)
    assert body["status"] == response.status_code
    return body

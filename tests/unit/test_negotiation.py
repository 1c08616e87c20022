"""Unit tests for ``Accept`` header parsing and negotiation."""

from __future__ import annotations

import pytest

from responsekit.formatters import CsvFormatter, JsonFormatter, TextFormatter, XmlFormatter
from responsekit.negotiation import AcceptHeaderNegotiator, parse_accept_header, parse_quality
from responsekit.registry import FormatterRegistry


@pytest.fixture()
def negotiator() -> AcceptHeaderNegotiator:
    return AcceptHeaderNegotiator()


@pytest.fixture()
def json_text() -> FormatterRegistry:
    return FormatterRegistry([JsonFormatter(), TextFormatter()])


@pytest.mark.parametrize(
    ("params", "expected"),
    [
        (["q=0.5"], 0.5),
        (["Q=.8"], 0.8),
        (["q=2.0"], 1.0),
        (["q=-1"], 1.0),
        (["q=abc"], 1.0),
        (["level=1", "q=0"], 0.0),
        ([], 1.0),
    ],
)
def test_parse_quality(params, expected) -> None:
    assert parse_quality(params) == expected


class TestParseAcceptHeader:
    def test_sorted_by_quality_with_stable_ties(self):
        ranges = parse_accept_header("text/csv;q=0.5, application/xml, text/plain, application/json;q=0.9")

        assert [r.full for r in ranges] == ["application/xml", "text/plain", "application/json", "text/csv"]

    def test_entries_are_trimmed_lowercased_and_empty_ones_skipped(self):
        ranges = parse_accept_header(" Text/HTML ; q=0.7 ,, ")

        assert len(ranges) == 1
        assert ranges[0].full == "text/html"
        assert ranges[0].quality == 0.7

    def test_duplicate_keeps_last_quality(self):
        ranges = parse_accept_header("application/json;q=0.1, text/plain;q=0.5, application/json;q=0.9")

        assert [(r.full, r.quality) for r in ranges] == [("application/json", 0.9), ("text/plain", 0.5)]


class TestAcceptHeaderNegotiator:
    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_blank_header_yields_none(self, negotiator, json_text, header):
        assert negotiator.negotiate(header, json_text) is None

    def test_exact_match(self, negotiator, json_text):
        assert negotiator.negotiate("text/plain", json_text) == "text/plain"

    def test_unqualified_wildcard_prefers_first_registered(self, negotiator, json_text):
        assert negotiator.negotiate("*/*;q=1.0", json_text) == "application/json"
        assert negotiator.negotiate("text/plain, */*", json_text) == "application/json"

    def test_exact_beats_lower_quality_wildcard(self, negotiator, json_text):
        assert negotiator.negotiate("text/plain, */*;q=0.5", json_text) == "text/plain"

    def test_qualified_wildcard_falls_back_to_registry_order(self, negotiator, json_text):
        assert negotiator.negotiate("application/xml, */*;q=0.1", json_text) == "application/json"

    def test_type_wildcard_picks_first_matching_in_registry_order(self, negotiator):
        registry = FormatterRegistry([JsonFormatter(), CsvFormatter(), TextFormatter()])

        assert negotiator.negotiate("text/*", registry) == "text/csv"

    def test_higher_quality_wins(self, negotiator):
        registry = FormatterRegistry([JsonFormatter(), XmlFormatter()])

        assert negotiator.negotiate("application/json;q=0.4, application/xml;q=0.8", registry) == "application/xml"

    def test_zero_quality_is_never_chosen(self, negotiator, json_text):
        assert negotiator.negotiate("text/plain;q=0", json_text) is None

    def test_unsupported_type_yields_none(self, negotiator, json_text):
        assert negotiator.negotiate("image/png", json_text) is None

    def test_empty_registry(self, negotiator):
        assert negotiator.negotiate("*/*", FormatterRegistry()) is None

    def test_result_is_deterministic(self, negotiator, json_text):
        header = "text/plain;q=0.5, application/json;q=0.5"

        results = {negotiator.negotiate(header, json_text) for _ in range(5)}

        assert results == {"text/plain"}

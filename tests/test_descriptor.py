"""Tests for the request descriptor and header block helpers."""

import pytest

from request_importer.descriptor import (
    RequestDescriptor,
    find_header,
    format_headers,
    parse_headers,
)


class TestFormatHeaders:
    """Tests for format_headers function."""

    def test_empty_mapping(self):
        assert format_headers({}) == ""

    def test_lines_in_mapping_order(self):
        headers = {"Authorization": "Bearer token123", "Content-Type": "application/json"}
        assert format_headers(headers) == (
            "Authorization: Bearer token123\nContent-Type: application/json"
        )

    def test_empty_value(self):
        assert format_headers({"X-Empty": ""}) == "X-Empty: "


class TestParseHeaders:
    """Tests for parse_headers function."""

    def test_empty_input(self):
        assert parse_headers("") == {}

    def test_blank_lines_only(self):
        assert parse_headers("\n  \n\t\n") == {}

    def test_basic_block(self):
        text = "Authorization: Bearer token123\nContent-Type: application/json"
        assert parse_headers(text) == {
            "Authorization": "Bearer token123",
            "Content-Type": "application/json",
        }

    def test_crlf_line_endings(self):
        assert parse_headers("A: 1\r\nB: 2\r\n") == {"A": "1", "B": "2"}

    def test_split_on_first_colon(self):
        assert parse_headers("Cookie: session=abc:def") == {"Cookie": "session=abc:def"}

    def test_lines_without_colon_are_skipped(self):
        assert parse_headers("garbage\nA: 1") == {"A": "1"}

    def test_empty_name_is_skipped(self):
        assert parse_headers(": orphan\n  : x\nA: 1") == {"A": "1"}

    def test_empty_value_is_kept(self):
        assert parse_headers("X-Empty:") == {"X-Empty": ""}

    def test_whitespace_is_trimmed(self):
        assert parse_headers("   A   :   spaced value  ") == {"A": "spaced value"}

    def test_duplicate_keeps_first_position(self):
        result = parse_headers("A: 1\nB: 2\nA: 3")
        assert list(result.items()) == [("A", "3"), ("B", "2")]

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"A": "1"},
            {"Zeta": "z", "Alpha": "", "Mid": "a: b: c"},
            {"authorization": "Bearer x", "Authorization": "Bearer y"},
        ],
    )
    def test_round_trip(self, headers):
        result = parse_headers(format_headers(headers))
        assert list(result.items()) == list(headers.items())


class TestRequestDescriptor:
    """Tests for the RequestDescriptor container."""

    def test_defaults(self):
        req = RequestDescriptor("https://x.test")
        assert req.method == "GET"
        assert req.headers == {}
        assert req.body is None

    def test_method_is_uppercased(self):
        assert RequestDescriptor("https://x.test", "patch").method == "PATCH"

    def test_headers_are_copied(self):
        headers = {"A": "1"}
        req = RequestDescriptor("https://x.test", headers=headers)
        req.headers["B"] = "2"
        assert headers == {"A": "1"}

    def test_equality_includes_header_order(self):
        a = RequestDescriptor("https://x.test", headers={"A": "1", "B": "2"})
        b = RequestDescriptor("https://x.test", headers={"B": "2", "A": "1"})
        assert a != b
        assert a == RequestDescriptor("https://x.test", headers={"A": "1", "B": "2"})

    def test_to_dict(self):
        req = RequestDescriptor("https://x.test", "POST", {"A": "1"}, "{}")
        assert req.to_dict() == {
            "url": "https://x.test",
            "method": "POST",
            "headers": {"A": "1"},
            "body": "{}",
        }

    def test_repr(self):
        r = repr(RequestDescriptor("https://x.test", headers={"A": "1"}))
        assert "GET" in r
        assert "https://x.test" in r
        assert "<1 headers>" in r
        assert "<none>" in r

    def test_repr_with_empty_body(self):
        assert "<present>" in repr(RequestDescriptor("https://x.test", body=""))


class TestFindHeader:
    """Tests for case-insensitive header lookup."""

    def test_returns_existing_spelling(self):
        assert find_header({"content-TYPE": "x"}, "Content-Type") == "content-TYPE"

    def test_first_match_wins(self):
        assert find_header({"a": "1", "A": "2"}, "A") == "a"

    def test_missing(self):
        assert find_header({"B": "1"}, "A") is None

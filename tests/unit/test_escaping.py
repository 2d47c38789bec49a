"""Unit tests for mimetable.escaping."""

from __future__ import annotations

import pytest

from mimetable.escaping import escape, quote, unquote


class TestQuote:
    def test_plain(self) -> None:
        assert quote("text/html") == "'text/html'"

    def test_quote_and_backslash_escaped(self) -> None:
        assert escape("it's") == "it\\'s"
        assert escape("a\\b") == "a\\\\b"

    def test_line_breaks_escaped(self) -> None:
        assert "\n" not in quote("a\nb")
        assert "\r" not in quote("a\rb")

    @pytest.mark.parametrize(
        "value",
        ["", "json", "it's", "back\\slash", "\\'", "'\\", "tab\there", "café", "nul\0", "x\r\ny"],
    )
    def test_unquote_inverts_quote(self, value: str) -> None:
        assert unquote(quote(value)) == value


class TestUnquote:
    @pytest.mark.parametrize(
        "literal",
        [
            "json",  # unquoted
            '"json"',  # other quote style
            "'a' 'b'",  # implicit concatenation
            "b'json'",  # prefix
            "'\\x6a'",  # escape quote() never emits
            "'",
            "'unterminated",
        ],
    )
    def test_rejects_foreign_literals(self, literal: str) -> None:
        with pytest.raises(ValueError):
            unquote(literal)

"""Tests for slant.tokens."""

from __future__ import annotations

import pytest

from slant.errors import UnexpectedEOFError, UnexpectedTokenError, UnknownTokenError
from slant.tokens import Token, TokenCursor, is_token, tokenize


def _values(text: str) -> list[str]:
    return [t.value for t in tokenize(text)]


# ── tokenize ───────────────────────────────────────────────────────────────


class TestTokenize:
    def test_empty(self) -> None:
        assert tokenize("") == []
        assert tokenize(" \t\r\n ") == []

    def test_splits_on_all_separators(self) -> None:
        assert _values("a\tb\r\nc  d\ne") == ["a", "b", "c", "d", "e"]

    def test_punctuation_must_stand_alone(self) -> None:
        assert _values("servers host{ waittime 30; }") == [
            "servers", "host{", "waittime", "30;", "}",
        ]
        assert _values("host { }") == ["host", "{", "}"]

    def test_form_feed_is_not_a_separator(self) -> None:
        assert _values("a\fb c\vd") == ["a\fb", "c\vd"]

    def test_line_numbers(self) -> None:
        tokens = tokenize("waittime 60 ;\n\nservers\n  a b ;")
        assert tokens[0] == Token("waittime", 1)
        assert tokens[2] == Token(";", 1)
        assert tokens[3] == Token("servers", 3)
        assert [t.line for t in tokens[4:]] == [4, 4, 4]

    def test_crlf_line_numbers(self) -> None:
        tokens = tokenize("a\r\nb\r\nc")
        assert [t.line for t in tokens] == [1, 2, 3]

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("host", True), ("a\fb", True), ("", False), ("a b", False), ("a\n", False)],
    )
    def test_is_token(self, text: str, expected: bool) -> None:
        assert is_token(text) is expected


# ── TokenCursor ────────────────────────────────────────────────────────────


def _cursor(text: str) -> TokenCursor:
    return TokenCursor(tokenize(text), "test.conf")


class TestTokenCursor:
    def test_at_end_on_empty(self) -> None:
        cur = _cursor("")
        assert cur.at_end
        assert cur.line is None
        assert cur.equals("x") is False

    def test_current_at_end_raises(self) -> None:
        cur = _cursor("")
        with pytest.raises(UnexpectedEOFError):
            cur.current

    def test_equals_does_not_consume(self) -> None:
        cur = _cursor("a b")
        assert cur.equals("a")
        assert cur.equals("a")
        assert cur.pos == 0

    def test_equals_advance_consumes_only_on_match(self) -> None:
        cur = _cursor("a b")
        assert cur.equals_advance("b") is False
        assert cur.pos == 0
        assert cur.equals_advance("a") is True
        assert cur.current == "b"

    def test_expect_advance(self) -> None:
        cur = _cursor("{ }")
        cur.expect_advance("{")
        cur.expect_advance("}")
        assert cur.at_end

    def test_expect_advance_mismatch(self) -> None:
        cur = _cursor("\n  ;")
        with pytest.raises(UnexpectedTokenError) as exc:
            cur.expect_advance("}")
        assert exc.value.expected == "}"
        assert exc.value.got == ";"
        assert exc.value.line == 2
        assert str(exc.value) == 'test.conf:2: expected "}", have ";"'
        assert cur.pos == 0

    def test_expect_advance_at_end(self) -> None:
        cur = _cursor("a")
        cur.take()
        with pytest.raises(UnexpectedEOFError) as exc:
            cur.expect_advance(";")
        assert exc.value.line == 1

    def test_advance_or_fail(self) -> None:
        cur = _cursor("a b")
        cur.advance_or_fail()
        assert cur.current == "b"
        with pytest.raises(UnexpectedEOFError):
            cur.advance_or_fail()

    def test_take(self) -> None:
        cur = _cursor("a b")
        assert cur.take() == "a"
        assert cur.take() == "b"
        assert cur.at_end
        with pytest.raises(UnexpectedEOFError):
            cur.take()

    def test_unknown(self) -> None:
        cur = _cursor("bogus")
        err = cur.unknown()
        assert isinstance(err, UnknownTokenError)
        assert err.token == "bogus"
        assert str(err) == 'test.conf:1: unknown token: "bogus"'

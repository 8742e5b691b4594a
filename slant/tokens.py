"""Tokenizer and token cursor for the slant configuration language.

The format has no quoting, escaping or comments. A token is any run of
characters other than space, tab, CR and LF, so punctuation only counts as
punctuation when it stands alone: ``host {`` is two tokens, ``host{`` is one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from slant.errors import UnexpectedEOFError, UnexpectedTokenError, UnknownTokenError

# Only these four characters separate tokens (not \f or \v).
_TOKEN_RE = re.compile(r"[^ \t\r\n]+")


@dataclass(frozen=True)
class Token:
    value: str
    line: int


def tokenize(text: str) -> list[Token]:
    """Split *text* into whitespace-delimited tokens, tracking line numbers."""
    tokens: list[Token] = []
    line = 1
    last = 0
    for m in _TOKEN_RE.finditer(text):
        line += text.count("\n", last, m.start())
        last = m.start()
        tokens.append(Token(m.group(), line))
    return tokens


def is_token(text: str) -> bool:
    """True if *text* would be read back as exactly one token."""
    return _TOKEN_RE.fullmatch(text) is not None


class TokenCursor:
    """Position pointer over a token list with one token of lookahead."""

    def __init__(self, tokens: list[Token], source: str) -> None:
        self.tokens = tokens
        self.source = source
        self.pos = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    @property
    def line(self) -> int | None:
        """Line of the current token, or of the last one once at end."""
        if not self.tokens:
            return None
        return self.tokens[min(self.pos, len(self.tokens) - 1)].line

    @property
    def current(self) -> str:
        if self.at_end:
            raise UnexpectedEOFError(self.source, self.line)
        return self.tokens[self.pos].value

    def take(self) -> str:
        """Return the current token and move past it."""
        value = self.current
        self.pos += 1
        return value

    def advance_or_fail(self) -> None:
        self.pos += 1
        if self.at_end:
            raise UnexpectedEOFError(self.source, self.line)

    def equals(self, value: str) -> bool:
        return not self.at_end and self.tokens[self.pos].value == value

    def equals_advance(self, value: str) -> bool:
        if self.equals(value):
            self.pos += 1
            return True
        return False

    def expect(self, value: str) -> None:
        """Require *value* at the current position without consuming it."""
        if self.current != value:
            raise UnexpectedTokenError(self.source, value, self.current, self.line)

    def expect_advance(self, value: str) -> None:
        self.expect(value)
        self.pos += 1

    def unknown(self) -> UnknownTokenError:
        """Build the error for a token not valid at this position."""
        return UnknownTokenError(self.source, self.current, self.line)

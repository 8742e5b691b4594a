"""Recursive-descent parser for the slant configuration language.

Grammar::

    config      := statement*
    statement   := "waittime" NUMBER ";"
                 | "servers" HOST+ ( "{" server-args "}" )? ";"
                 | "layout" "{" layout-body "}" ";"
    server-args := ( "waittime" NUMBER ";"? )*
    layout-body := item ( ";"+ item )* ";"*
    item        := "header" | "errlog" NUMBER
                 | "host" "{" box-def ( ";" box-def )* ";"? "}"
    box-def     := category option*

Every rule is written against the ``TokenCursor`` primitives. Parsers write
straight into the ``Configuration`` they are given, so a failure leaves a
partial but consistent tree behind.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from slant.errors import (
    ConfigError,
    DuplicateSectionError,
    EmptyServerListError,
    InvalidRangeError,
)
from slant.layout import OPTION_KEYWORDS, Box, Category, Layout, empty_options
from slant.tokens import TokenCursor, tokenize

if TYPE_CHECKING:
    from slant.config import Configuration

INT_MAX = 2**31 - 1
MIN_WAITTIME = 15

_NUMBER_RE = re.compile(r"[+-]?[0-9]+")
_CATEGORIES = {c.keyword: c for c in Category}


def parse_number(cur: TokenCursor, what: str, lo: int, hi: int = INT_MAX) -> int:
    """Read the current token as a decimal integer in [lo, hi].

    The token is not consumed. Signs are accepted, anything else that is not
    a plain run of digits is rejected as invalid.
    """
    text = cur.current
    if not _NUMBER_RE.fullmatch(text):
        raise InvalidRangeError(cur.source, what, "invalid", text, cur.line)
    # Keep int() away from absurdly long digit strings.
    if len(text.lstrip("+-").lstrip("0")) > len(str(INT_MAX)):
        reason = "too small" if text.startswith("-") else "too large"
        raise InvalidRangeError(cur.source, what, reason, text, cur.line)
    value = int(text)
    if value < lo:
        raise InvalidRangeError(cur.source, what, "too small", text, cur.line)
    if value > hi:
        raise InvalidRangeError(cur.source, what, "too large", text, cur.line)
    return value


# ── Top-level statements ───────────────────────────────────────────────────


def parse_waittime(cur: TokenCursor, cfg: Configuration) -> None:
    """NUMBER ";" after the "waittime" keyword."""
    cfg.waittime = parse_number(cur, "global waittime", MIN_WAITTIME)
    cur.advance_or_fail()
    cur.expect_advance(";")


def parse_server_list(cur: TokenCursor, cfg: Configuration) -> int:
    """Add one server per token up to ";" or "{" and return how many."""
    count = 0
    while not cur.at_end and not cur.equals(";") and not cur.equals("{"):
        cfg.add_server(cur.take())
        count += 1
    if count == 0:
        raise EmptyServerListError(cur.source, cur.line)
    return count


def parse_server_args(cur: TokenCursor, cfg: Configuration, count: int) -> None:
    """["waittime" NUMBER [";"]]* "}", applied to the last *count* servers."""
    waittime = 0
    while not cur.at_end and not cur.equals("}"):
        if not cur.equals_advance("waittime"):
            raise cur.unknown()
        waittime = parse_number(cur, "server waittime", MIN_WAITTIME)
        cur.advance_or_fail()
        cur.equals_advance(";")
    cur.expect_advance("}")

    if waittime == 0:
        return
    # Only the hosts named by this statement.
    for entry in cfg.servers[len(cfg.servers) - count :]:
        entry.waittime = waittime


def parse_servers(cur: TokenCursor, cfg: Configuration) -> None:
    """HOST+ ["{" server-args "}"] ";" after the "servers" keyword."""
    count = parse_server_list(cur, cfg)
    if cur.equals_advance("{"):
        parse_server_args(cur, cfg, count)
    cur.expect_advance(";")


# ── Layout ─────────────────────────────────────────────────────────────────


def parse_box(cur: TokenCursor) -> Box:
    """A category keyword and its options, up to ";" or "}"."""
    category = _CATEGORIES.get(cur.current)
    if category is None:
        raise cur.unknown()
    cur.take()

    keywords = OPTION_KEYWORDS[category]
    options = empty_options(category)
    while not cur.equals(";") and not cur.equals("}"):
        flag = keywords.get(cur.current)
        if flag is None:
            raise cur.unknown()
        options |= flag
        cur.take()
    return Box(category, options)


def parse_layout_host(cur: TokenCursor, layout: Layout) -> None:
    cur.expect_advance("{")
    while not cur.equals("}"):
        layout.boxes.append(parse_box(cur))
        if cur.equals("}"):
            break
        cur.expect_advance(";")
    cur.expect_advance("}")


def parse_layout(cur: TokenCursor, cfg: Configuration) -> None:
    """Body of a layout statement, up to and including the closing ";"."""
    line = cur.line
    cur.expect_advance("{")
    if cfg.layout is not None:
        raise DuplicateSectionError(cur.source, "layout", line)
    cfg.layout = layout = Layout()

    while not cur.equals("}"):
        if cur.equals_advance("header"):
            layout.header = True
        elif cur.equals_advance("errlog"):
            layout.errlog = parse_number(cur, "layout errlog", 0)
            cur.advance_or_fail()
        elif cur.equals_advance("host"):
            parse_layout_host(cur, layout)
        else:
            raise cur.unknown()

        if cur.equals("}"):
            break
        cur.expect_advance(";")
        while cur.equals_advance(";"):
            pass

    cur.expect_advance("}")
    cur.expect_advance(";")


# ── Driver ─────────────────────────────────────────────────────────────────

_STATEMENTS = {
    "servers": parse_servers,
    "layout": parse_layout,
    "waittime": parse_waittime,
}


def parse_tokens(cur: TokenCursor, cfg: Configuration) -> None:
    """Parse every statement in *cur* into *cfg*.

    On failure the raised ``ConfigError`` has ``config`` set to *cfg*, which
    holds whatever was built before the error.
    """
    try:
        while not cur.at_end:
            for keyword, statement in _STATEMENTS.items():
                if cur.equals_advance(keyword):
                    statement(cur, cfg)
                    break
            else:
                raise cur.unknown()
    except ConfigError as e:
        e.config = cfg
        raise


def parse_text(text: str, source: str, cfg: Configuration) -> None:
    parse_tokens(TokenCursor(tokenize(text), source), cfg)

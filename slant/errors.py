"""Errors raised while loading a slant configuration.

Every parse error is fatal: the first one aborts the parse and the whole file
is treated as invalid. Errors carry the source name and, where known, the line
of the offending token so the message can point at it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slant.config import Configuration


class ConfigError(Exception):
    """Base class for configuration failures."""

    def __init__(self, source: str, message: str, line: int | None = None) -> None:
        self.source = source
        self.message = message
        self.line = line
        # Partial tree left behind by a failed parse, set by the parser.
        self.config: Configuration | None = None
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.source}: {self.message}"
        return f"{self.source}:{self.line}: {self.message}"


class UnexpectedEOFError(ConfigError):
    def __init__(self, source: str, line: int | None = None) -> None:
        super().__init__(source, "unexpected eof", line)


class UnexpectedTokenError(ConfigError):
    def __init__(self, source: str, expected: str, got: str, line: int | None = None) -> None:
        self.expected = expected
        self.got = got
        super().__init__(source, f'expected "{expected}", have "{got}"', line)


class UnknownTokenError(ConfigError):
    def __init__(self, source: str, token: str, line: int | None = None) -> None:
        self.token = token
        super().__init__(source, f'unknown token: "{token}"', line)


class InvalidRangeError(ConfigError):
    """A number was malformed or outside its permitted bounds."""

    def __init__(
        self,
        source: str,
        what: str,
        reason: str,
        got: str,
        line: int | None = None,
    ) -> None:
        self.what = what
        self.reason = reason
        self.got = got
        super().__init__(source, f'bad {what}: {reason}: "{got}"', line)


class EmptyServerListError(ConfigError):
    def __init__(self, source: str, line: int | None = None) -> None:
        super().__init__(source, "no servers in statement", line)


class DuplicateSectionError(ConfigError):
    def __init__(self, source: str, section: str, line: int | None = None) -> None:
        self.section = section
        super().__init__(source, f"{section} already specified", line)


class ConfigIOError(ConfigError):
    """The file exists but could not be read. Always chained from the OSError."""

"""Screen layout types: box categories and their display options.

Each box shows one metric category. Its options are a bit set whose legal
members depend on the category; the keyword tables below are the only way
options get set, so a box never carries a bit foreign to its category.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Category(enum.Enum):
    CPU = "cpu"
    MEM = "mem"
    NET = "net"
    DISC = "disc"
    LINK = "link"
    HOST = "host"
    NPROCS = "nprocs"
    RPROCS = "rprocs"
    NFILES = "nfiles"

    @property
    def keyword(self) -> str:
        return self.value


class HistoryOption(enum.IntFlag):
    """Time-series views for the sampled categories."""

    QMIN_BARS = enum.auto()
    QMIN = enum.auto()
    MIN = enum.auto()
    HOUR = enum.auto()
    DAY = enum.auto()
    WEEK = enum.auto()
    YEAR = enum.auto()


class LinkOption(enum.IntFlag):
    IP = enum.auto()
    STATE = enum.auto()
    ACCESS = enum.auto()


class HostOption(enum.IntFlag):
    ACCESS = enum.auto()


# ── Per-category option keywords ───────────────────────────────────────────

_HISTORY: dict[str, enum.IntFlag] = {
    "qmin_bars": HistoryOption.QMIN_BARS,
    "qmin": HistoryOption.QMIN,
    "min": HistoryOption.MIN,
    "hour": HistoryOption.HOUR,
    "day": HistoryOption.DAY,
    "week": HistoryOption.WEEK,
    "year": HistoryOption.YEAR,
}

# net and disc have no bar view
_HISTORY_NO_BARS = {k: v for k, v in _HISTORY.items() if k != "qmin_bars"}

_LINK: dict[str, enum.IntFlag] = {
    "ip": LinkOption.IP,
    "state": LinkOption.STATE,
    "access": LinkOption.ACCESS,
}

OPTION_KEYWORDS: dict[Category, dict[str, enum.IntFlag]] = {
    Category.CPU: _HISTORY,
    Category.MEM: _HISTORY,
    Category.NET: _HISTORY_NO_BARS,
    Category.DISC: _HISTORY_NO_BARS,
    Category.LINK: _LINK,
    Category.HOST: {},
    Category.NPROCS: _HISTORY,
    Category.RPROCS: _HISTORY,
    Category.NFILES: _HISTORY,
}

OPTION_TYPES: dict[Category, type[enum.IntFlag]] = {
    Category.LINK: LinkOption,
    Category.HOST: HostOption,
}

# Flags a category carries regardless of what the configuration says.
FIXED_OPTIONS: dict[Category, enum.IntFlag] = {
    Category.HOST: HostOption.ACCESS,
}


def empty_options(category: Category) -> enum.IntFlag:
    """Starting option set for a new box of *category*."""
    fixed = FIXED_OPTIONS.get(category)
    if fixed is not None:
        return fixed
    return OPTION_TYPES.get(category, HistoryOption)(0)


def option_keywords(category: Category, options: enum.IntFlag) -> list[str]:
    """Configuration keywords for the non-fixed bits in *options*, table order."""
    return [kw for kw, flag in OPTION_KEYWORDS[category].items() if flag in options]


# ── Data types ─────────────────────────────────────────────────────────────


@dataclass
class Box:
    category: Category
    options: enum.IntFlag = field(default_factory=lambda: HistoryOption(0))

    def __post_init__(self) -> None:
        if not self.options:
            self.options = empty_options(self.category)


@dataclass
class Layout:
    """On-screen arrangement: optional header, error log pane and boxes."""

    header: bool = False
    errlog: int = 0  # lines, 0 = disabled
    boxes: list[Box] = field(default_factory=lambda: list[Box]())

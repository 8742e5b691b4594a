"""Configuration loading for slant.

Reads the configuration file (default ``~/.slantrc``) and builds the
``Configuration`` consumed by the poller and the screen layout.
If the file does not exist, the servers named on the command line are used
instead. If it exists and hosts are also given on the command line, those
hosts replace the file's servers but the file's layout and waittime stay.
"""

from __future__ import annotations

import itertools
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from slant.errors import ConfigError, ConfigIOError
from slant.layout import Layout, option_keywords
from slant.parser import parse_text
from slant.tokens import is_token

DEFAULT_WAITTIME = 60

ARGV_SOURCE = "command line"

_DEFAULT_PATH = Path.home() / ".slantrc"

DEFAULT_CONFIG_TEXT = """\
waittime 60 ;
servers https://localhost/cgi-bin/slant-collectd ;
layout {
  header ;
  errlog 5 ;
  host {
    cpu qmin_bars hour day ;
    mem qmin_bars hour day ;
    net qmin hour ;
    disc qmin hour ;
    nprocs hour ;
    link ip state access ;
    host ;
  } ;
} ;
"""


# ── Data types ─────────────────────────────────────────────────────────────


@dataclass
class ServerEntry:
    """A remote host to poll."""

    url: str
    waittime: int = 0  # seconds, 0 = use the global waittime


@dataclass
class Configuration:
    waittime: int = DEFAULT_WAITTIME
    servers: list[ServerEntry] = field(default_factory=lambda: list[ServerEntry]())
    layout: Layout | None = None

    def add_server(self, url: str) -> ServerEntry:
        entry = ServerEntry(url=url)
        self.servers.append(entry)
        return entry

    def waittime_for(self, entry: ServerEntry) -> int:
        """Seconds between polls of *entry*: its override, else the global value."""
        return entry.waittime or self.waittime

    def release(self) -> None:
        """Drop every server and the layout. Safe to call more than once."""
        self.servers.clear()
        if self.layout is not None:
            self.layout.boxes.clear()
        self.layout = None


# ── Construction ───────────────────────────────────────────────────────────


def config_from_argv(argv: Sequence[str], cfg: Configuration | None = None) -> Configuration:
    """Replace the servers of *cfg* (or a fresh config) with one per argument.

    Raises:
        ConfigError: If an argument is empty. *cfg* is left untouched.
    """
    urls = [str(url) for url in argv]
    if "" in urls:
        raise ConfigError(ARGV_SOURCE, "empty server address")
    if cfg is None:
        cfg = Configuration()
    cfg.servers.clear()
    for url in urls:
        cfg.add_server(url)
    return cfg


def parse_configuration(path: str | Path, argv: Sequence[str] = ()) -> Configuration:
    """Build the configuration from *path* and the command-line hosts *argv*.

    Args:
        path: Configuration file. A missing file is not an error: the
              configuration is then built from *argv* alone.
        argv: Hosts given on the command line. When non-empty they replace
              any servers declared in the file.

    Returns:
        The parsed configuration.

    Raises:
        ConfigIOError: If the file exists but can't be read.
        ConfigError: On the first syntax or range error in the file; its
                     ``config`` attribute holds the partial configuration.
    """
    path = Path(path)
    cfg = Configuration()
    try:
        text = path.read_text(encoding="utf-8", errors="surrogateescape")
    except FileNotFoundError:
        return config_from_argv(argv, cfg)
    except OSError as e:
        raise ConfigIOError(str(path), e.strerror or str(e)) from e

    parse_text(text, str(path), cfg)

    # Command-line hosts always win over the file's.
    if argv:
        config_from_argv(argv, cfg)
    return cfg


def load_config(path: Path | None = None, argv: Sequence[str] = ()) -> Configuration:
    """Load configuration for the application, exiting on errors.

    Args:
        path: Explicit config file path (from -f). If None, uses ~/.slantrc.
        argv: Hosts from the command line.

    Returns:
        The parsed configuration.

    Raises:
        SystemExit: If the file can't be read or parsed.
    """
    if path is None:
        path = _DEFAULT_PATH
    try:
        return parse_configuration(path, argv)
    except ConfigError as e:
        if e.config is not None:
            e.config.release()
        print(f"slant: {e}", file=sys.stderr)
        raise SystemExit(1) from e


# ── Output ─────────────────────────────────────────────────────────────────


def _dump_servers(cfg: Configuration) -> list[str]:
    """One servers statement per run of hosts sharing the same override.

    Raises ValueError for a host that would not parse back as itself.
    """
    lines: list[str] = []
    for entry in cfg.servers:
        if not is_token(entry.url) or entry.url in (";", "{"):
            raise ValueError(f"cannot write server address {entry.url!r}")
    for waittime, run in itertools.groupby(cfg.servers, key=lambda e: e.waittime):
        urls = " ".join(e.url for e in run)
        if waittime:
            lines.append(f"servers {urls} {{ waittime {waittime} ; }} ;")
        else:
            lines.append(f"servers {urls} ;")
    return lines


def _dump_layout(layout: Layout) -> list[str]:
    lines = ["layout {"]
    if layout.header:
        lines.append("  header ;")
    if layout.errlog:
        lines.append(f"  errlog {layout.errlog} ;")
    if layout.boxes:
        lines.append("  host {")
        for box in layout.boxes:
            words = [box.category.keyword, *option_keywords(box.category, box.options)]
            lines.append(f"    {' '.join(words)} ;")
        lines.append("  } ;")
    lines.append("} ;")
    return lines


def dump_config(cfg: Configuration) -> str:
    """Render *cfg* back into configuration syntax.

    Raises:
        ValueError: If a server address is not a single token, or is one of
                    the punctuation tokens that end a host list.
    """
    lines = [f"waittime {cfg.waittime} ;"]
    lines.extend(_dump_servers(cfg))
    if cfg.layout is not None:
        lines.extend(_dump_layout(cfg.layout))
    return "\n".join(lines) + "\n"


def dump_default_config() -> str:
    """Return a sample configuration, suitable for ~/.slantrc."""
    return DEFAULT_CONFIG_TEXT

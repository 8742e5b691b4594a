"""Check a slant configuration and show what the dashboard would use.

Usage:
    slant-config
    slant-config -f path/to/slantrc --dump
    slant-config https://host1/cgi-bin/slant-collectd https://host2/...
"""

from __future__ import annotations

import argparse
import io
import sys
from pathlib import Path

from slant.config import Configuration, dump_config, dump_default_config, load_config
from slant.layout import option_keywords


def format_summary(cfg: Configuration) -> str:
    """Human-readable summary of servers and layout."""
    lines = [f"waittime: {cfg.waittime}s"]

    lines.append(f"servers:  {len(cfg.servers)}")
    for entry in cfg.servers:
        note = "" if entry.waittime else " (global)"
        lines.append(f"  - {entry.url}  every {cfg.waittime_for(entry)}s{note}")

    if cfg.layout is None:
        lines.append("layout:   default")
    else:
        layout = cfg.layout
        lines.append(f"layout:   {len(layout.boxes)} box(es)")
        lines.append(f"  {'header':10s}  {'yes' if layout.header else 'no'}")
        errlog = f"{layout.errlog} line(s)" if layout.errlog else "off"
        lines.append(f"  {'errlog':10s}  {errlog}")
        for box in layout.boxes:
            opts = " ".join(option_keywords(box.category, box.options)) or "-"
            lines.append(f"  {box.category.keyword:10s}  {opts}")

    return "\n".join(lines)


def _reconfigure_output() -> None:
    """Write undecodable bytes from the config file back out unchanged."""
    for stream in (sys.stdout, sys.stderr):
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(errors="surrogateescape")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Check a slant configuration file.",
    )
    parser.add_argument(
        "hosts", nargs="*", metavar="URL",
        help="Servers to poll, replacing those in the configuration file",
    )
    parser.add_argument(
        "-f", "--config", type=Path, default=None, metavar="PATH",
        help="Configuration file (default: ~/.slantrc)",
    )
    parser.add_argument(
        "--dump", action="store_true",
        help="Print the effective configuration in configuration syntax",
    )
    parser.add_argument(
        "--print-default", action="store_true",
        help="Print a sample configuration and exit",
    )
    args = parser.parse_args()
    _reconfigure_output()

    if args.print_default:
        print(dump_default_config(), end="")
        return

    cfg = load_config(args.config, args.hosts)
    if not cfg.servers:
        print("slant: no servers configured", file=sys.stderr)
        raise SystemExit(1)

    if args.dump:
        try:
            text = dump_config(cfg)
        except ValueError as e:
            print(f"slant: {e}", file=sys.stderr)
            raise SystemExit(1) from e
        print(text, end="")
    else:
        print(format_summary(cfg))


if __name__ == "__main__":
    main()

"""Command-line interface for stocktrack."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from datetime import datetime

from stocktrack import __version__
from stocktrack.config import Settings
from stocktrack.errors import ConfigError
from stocktrack.runtime import run
from stocktrack.utils.time import parse_timestamp, utc_now


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        prog="stocktrack",
        description="Track stock prices with ease!",
    )
    parser.add_argument(
        "-s",
        "--symbols",
        type=str,
        help="Comma-separated symbols, no spaces (default: AAPL,MSFT,UBER,GOOG)",
    )
    parser.add_argument(
        "-f",
        "--from",
        dest="from_",
        type=str,
        required=True,
        help="Start of the window as an RFC 3339 timestamp, e.g. 2024-01-01T00:00:00Z",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI values onto environment-derived settings."""
    overrides: dict[str, object] = {}
    if args.symbols is not None:
        overrides["symbols"] = args.symbols
    return settings.with_overrides(**overrides)


def resolve_window(args: argparse.Namespace, now: datetime) -> tuple[datetime, datetime]:
    """Return the ``(start, end)`` window; ``end`` is the captured run time."""
    return parse_timestamp(args.from_), now


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    now = utc_now()
    try:
        settings = apply_cli_overrides(Settings.from_env(), args)
        start, end = resolve_window(args, now)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    return run(settings, start, end)


if __name__ == "__main__":
    sys.exit(main())

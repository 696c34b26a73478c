"""Argument parsing for the shelfkeeper command line."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from ..reading.maintenance import MAINTENANCE_STEPS


def build_cli_parser() -> argparse.ArgumentParser:
    """Build the CLI parser with explicit sub-commands."""

    parser = argparse.ArgumentParser(
        prog="shelfkeeper",
        description="shelfkeeper reading progress tools",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Override the configured log level (debug, info, warning, error).",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        help="Path to a reader.yaml file (defaults to conf/reader.yaml).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    maintenance_parser = subparsers.add_parser(
        "maintenance",
        help="Repair duplicate, orphaned and overflowing progress rows.",
        allow_abbrev=False,
    )
    maintenance_parser.add_argument(
        "--step",
        choices=(*MAINTENANCE_STEPS, "all"),
        default="all",
        help="Run a single pass instead of the full sequence.",
    )

    continue_parser = subparsers.add_parser(
        "continue-point",
        help="Print the chapter a user should resume a series from.",
        allow_abbrev=False,
    )
    continue_parser.add_argument("series_id", type=int)
    continue_parser.add_argument("user_id", type=int)

    subparsers.add_parser(
        "init-db",
        help="Create every table on the configured database.",
        allow_abbrev=False,
    )
    return parser


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_cli_parser().parse_args(argv)


__all__ = ["build_cli_parser", "parse_cli_args"]

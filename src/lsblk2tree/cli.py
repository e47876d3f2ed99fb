"""Command-line argument parsing."""

import argparse
from pathlib import Path
from typing import List, Optional

from .executor import DEFAULT_TIMEOUT

FILTERS = ("all", "system", "non-system")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lsblk2tree",
        description="Show the block device tree from lsblk and flag the devices backing /.",
    )
    parser.add_argument(
        "--from-json",
        type=Path,
        default=None,
        metavar="PATH",
        help="Read captured 'lsblk --json' output from PATH ('-' for stdin) instead of running lsblk",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        metavar="DIR",
        help="Write devices.txt, report.md and lsblk-snapshot.json to DIR instead of printing the tree",
    )
    parser.add_argument(
        "--filter",
        choices=FILTERS,
        default="all",
        help="Top-level devices to include: all (default), system (backing /), or non-system",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        metavar="SECONDS",
        help=f"Timeout for the lsblk command (default: {DEFAULT_TIMEOUT})",
    )
    return parser.parse_args(argv)

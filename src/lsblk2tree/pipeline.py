"""
Snapshot persistence: write a parsed collection in lsblk's own JSON schema and load it back.

A saved snapshot is valid input for ``--from-json``.
"""

import sys
from pathlib import Path

from .builder import parse, serialize
from .errors import OutputEncodingError
from .schema import DeviceCollection

SNAPSHOT_FILENAME = "lsblk-snapshot.json"


def save_snapshot(collection: DeviceCollection, path: Path) -> None:
    Path(path).write_text(serialize(collection) + "\n")


def load_snapshot(path: Path) -> DeviceCollection:
    return parse(load_text(path))


def load_text(path: Path) -> str:
    """Read captured lsblk output from a file, or from stdin when path is "-"."""
    if str(path) == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise OutputEncodingError(str(path), str(e)) from e

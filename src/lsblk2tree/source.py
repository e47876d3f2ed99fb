"""
lsblk source: run the enumeration command and hand its output to the parser.

Process-level failures (missing binary, non-zero exit, undecodable output) are
reported as ExecutionError subclasses; parse failures pass through unchanged.
"""

import os
import sys
from typing import Optional

from .builder import parse
from .errors import CommandFailed, CommandNotFound
from .executor import Executor, make_executor
from .schema import DeviceCollection

_DEBUG = bool(os.environ.get("LSBLK2TREE_DEBUG", ""))

# --bytes keeps SIZE exact; MOUNTPOINTS needs util-linux >= 2.37
LSBLK_COMMAND = [
    "lsblk",
    "--json",
    "--bytes",
    "--output",
    "NAME,MAJ:MIN,RM,SIZE,RO,TYPE,MOUNTPOINTS",
]


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[lsblk2tree] source: {msg}", file=sys.stderr)


def read_lsblk(executor: Optional[Executor] = None) -> str:
    """Run lsblk and return its stdout."""
    if executor is None:
        executor = make_executor()
    _debug(f"running {' '.join(LSBLK_COMMAND)}")
    r = executor(LSBLK_COMMAND)
    if r.returncode == 127:
        raise CommandNotFound(LSBLK_COMMAND[0])
    if r.returncode != 0:
        raise CommandFailed(LSBLK_COMMAND[0], r.returncode, r.stderr)
    _debug(f"captured {len(r.stdout)} characters")
    return r.stdout


def get_devices(executor: Optional[Executor] = None) -> DeviceCollection:
    """Run lsblk and parse its output into a DeviceCollection."""
    collection = parse(read_lsblk(executor))
    _debug(f"parsed {len(collection.blockdevices)} top-level devices")
    return collection

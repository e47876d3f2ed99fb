"""
Entry point: python -m lsblk2tree [options]

Reads lsblk output (live or captured), builds the device tree, then prints it
or writes the rendered files to --output-dir.
"""

import sys
from pathlib import Path
from typing import List, Optional

from .builder import parse
from .cli import parse_args
from .errors import ExecutionError, ParseError, SerializeError
from .executor import make_executor
from .pipeline import SNAPSHOT_FILENAME, load_text, save_snapshot
from .query import non_system, system
from .renderers import run_all as run_all_renderers
from .renderers.tree import render_lines
from .schema import DeviceCollection
from .source import get_devices

EXIT_PARSE_ERROR = 1
EXIT_EXECUTION_ERROR = 2


def _load_collection(args) -> DeviceCollection:
    if args.from_json is not None:
        return parse(load_text(args.from_json))
    return get_devices(make_executor(args.timeout))


def _apply_filter(collection: DeviceCollection, name: str) -> DeviceCollection:
    if name == "system":
        return DeviceCollection(blockdevices=system(collection))
    if name == "non-system":
        return DeviceCollection(blockdevices=non_system(collection))
    return collection


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        collection = _load_collection(args)
    except ExecutionError as e:
        print(f"[lsblk2tree] error: {e}", file=sys.stderr)
        return EXIT_EXECUTION_ERROR
    except ParseError as e:
        print(f"[lsblk2tree] could not parse lsblk output: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR
    except OSError as e:
        print(f"[lsblk2tree] error: {e}", file=sys.stderr)
        return EXIT_EXECUTION_ERROR

    collection = _apply_filter(collection, args.filter)

    if args.output_dir is None:
        for line in render_lines(collection):
            print(line)
        return 0

    output_dir = Path(args.output_dir)
    try:
        run_all_renderers(collection, output_dir)
        save_snapshot(collection, output_dir / SNAPSHOT_FILENAME)
    except (OSError, SerializeError) as e:
        print(f"[lsblk2tree] error: {e}", file=sys.stderr)
        return EXIT_EXECUTION_ERROR
    print(f"Wrote devices.txt, report.md and {SNAPSHOT_FILENAME} to {output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""devices.txt renderer: lsblk-style tree with human-readable sizes."""

from pathlib import Path
from typing import List, Tuple

from jinja2 import Environment

from ..normalize import format_size
from ..query import active_mountpoints, iter_children
from ..schema import Device, DeviceCollection

HEADER = ("NAME", "MAJ:MIN", "RM", "SIZE", "RO", "TYPE", "MOUNTPOINTS")


def _tree_rows(collection: DeviceCollection) -> List[Tuple[str, Device]]:
    """(indented name, device) in display order."""
    rows = []
    # (device, label prefix, prefix inherited by its children)
    stack = [(d, "", "") for d in reversed(collection.blockdevices)]
    while stack:
        device, lead, indent = stack.pop()
        rows.append((lead + device.name, device))
        children = iter_children(device)
        for i in reversed(range(len(children))):
            last = i == len(children) - 1
            stack.append((
                children[i],
                indent + ("└─" if last else "├─"),
                indent + ("  " if last else "│ "),
            ))
    return rows


def render_lines(collection: DeviceCollection) -> List[str]:
    rows = _tree_rows(collection)
    table = [HEADER]
    for label, d in rows:
        table.append((
            label,
            str(d.major_minor),
            "1" if d.removable else "0",
            format_size(d.size_bytes),
            "1" if d.read_only else "0",
            d.raw_type or d.device_type.value,
            " ".join(active_mountpoints(d)),
        ))
    widths = [max(len(row[i]) for row in table) for i in range(len(HEADER) - 1)]
    lines = []
    for row in table:
        name, majmin, rm, size, ro, dtype, mounts = row
        line = (
            f"{name:<{widths[0]}} {majmin:>{widths[1]}} {rm:>{widths[2]}} "
            f"{size:>{widths[3]}} {ro:>{widths[4]}} {dtype:<{widths[5]}} {mounts}"
        )
        lines.append(line.rstrip())
    return lines


def render(
    collection: DeviceCollection,
    env: Environment,
    output_dir: Path,
) -> None:
    output_dir = Path(output_dir)
    lines = render_lines(collection)
    lines.append("")
    (output_dir / "devices.txt").write_text("\n".join(lines))

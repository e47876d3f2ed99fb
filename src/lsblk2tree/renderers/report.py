"""report.md renderer: summary, system vs data devices, mounted filesystems."""

from pathlib import Path
from typing import List, Optional

from jinja2 import Environment

from ..query import ROOT_MOUNTPOINT, active_mountpoints, non_system, system, walk
from ..schema import Device, DeviceCollection

REPORT_TEMPLATE = """\
# Block Device Report

## Summary

- Top-level devices: {{ collection.blockdevices | length }}
- Devices at all levels: {{ all_devices | length }}
- System devices (backing /): {{ system_devices | length }}
- Data devices: {{ data_devices | length }}
- Mounted filesystems: {{ mounted | length }}

{% if system_devices %}
## System Devices

| Device | Size | Root filesystem path |
|--------|------|----------------------|
{% for d, chain in system_devices %}
| {{ d.name }} | {{ d.size_bytes | size }} | {{ chain | join(" > ") }} |
{% endfor %}

{% endif %}
{% if data_devices %}
## Data Devices

| Device | Type | Size | Removable | Read-only |
|--------|------|------|-----------|-----------|
{% for d in data_devices %}
| {{ d.name }} | {{ d.raw_type }} | {{ d.size_bytes | size }} | {{ "yes" if d.removable else "no" }} | {{ "yes" if d.read_only else "no" }} |
{% endfor %}

{% endif %}
{% if mounted %}
## Mounted Filesystems

| Mountpoint | Device | Type | Size |
|------------|--------|------|------|
{% for mountpoint, d in mounted %}
| `{{ mountpoint }}` | {{ d.name }} | {{ d.raw_type }} | {{ d.size_bytes | size }} |
{% endfor %}

{% endif %}
{% if not collection.blockdevices %}
No block devices reported.
{% endif %}
"""


def _root_chain(device: Device) -> Optional[List[str]]:
    """Names from ``device`` down to the first node mounted at "/"."""
    # (node, names from device to node)
    stack = [(device, [device.name])]
    while stack:
        node, chain = stack.pop()
        if ROOT_MOUNTPOINT in active_mountpoints(node):
            return chain
        for child in reversed(node.children or ()):
            stack.append((child, chain + [child.name]))
    return None


def render(
    collection: DeviceCollection,
    env: Environment,
    output_dir: Path,
) -> None:
    output_dir = Path(output_dir)
    all_devices = [d for top in collection.blockdevices for d in walk(top)]
    system_devices = [(d, _root_chain(d) or []) for d in system(collection)]
    mounted = [(m, d) for d in all_devices for m in active_mountpoints(d)]
    text = env.from_string(REPORT_TEMPLATE).render(
        collection=collection,
        all_devices=all_devices,
        system_devices=system_devices,
        data_devices=non_system(collection),
        mounted=mounted,
    )
    (output_dir / "report.md").write_text(text)

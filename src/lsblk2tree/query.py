"""
Read-only queries over a device tree: mount state, root-filesystem detection, lookup.

Nothing here modifies a Device; every function is safe to call from any thread.
"""

from typing import Iterator, Optional, Tuple

from .schema import Device, DeviceCollection, DeviceType

ROOT_MOUNTPOINT = "/"


def active_mountpoints(device: Device) -> Tuple[str, ...]:
    """Non-null mountpoints, in lsblk order."""
    return tuple(m for m in device.mountpoints if m is not None)


def is_mounted(device: Device) -> bool:
    return any(m is not None for m in device.mountpoints)


def walk(device: Device) -> Iterator[Device]:
    """Depth-first, pre-order: the device itself, then each subtree in order."""
    stack = [device]
    while stack:
        current = stack.pop()
        yield current
        if current.children:
            stack.extend(reversed(current.children))


def is_system(device: Device) -> bool:
    """True if this device, or anything stacked on it, is mounted at "/"."""
    return any(ROOT_MOUNTPOINT in active_mountpoints(d) for d in walk(device))


def system(collection: DeviceCollection) -> Tuple[Device, ...]:
    """Top-level devices backing the root filesystem."""
    return tuple(d for d in collection.blockdevices if is_system(d))


def non_system(collection: DeviceCollection) -> Tuple[Device, ...]:
    """Top-level devices with no "/" mount anywhere in their subtree (data disks)."""
    return tuple(d for d in collection.blockdevices if not is_system(d))


def find_by_name(collection: DeviceCollection, name: str) -> Optional[Device]:
    """First top-level device called ``name``; children are not searched."""
    for device in collection.blockdevices:
        if device.name == name:
            return device
    return None


def find_child(device: Device, name: str) -> Optional[Device]:
    """First direct child called ``name``; grandchildren are not searched."""
    for child in iter_children(device):
        if child.name == name:
            return child
    return None


def iter_children(device: Device) -> Tuple[Device, ...]:
    """Direct children; empty when lsblk reported none. Can be iterated repeatedly."""
    return device.children or ()


def is_disk(device: Device) -> bool:
    return device.device_type is DeviceType.DISK


def is_partition(device: Device) -> bool:
    return device.device_type is DeviceType.PARTITION

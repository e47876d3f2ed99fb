"""
Tests for read-only queries: mount state, root filesystem detection, lookup.
"""

import pytest

from lsblk2tree.builder import build
from lsblk2tree.query import (
    active_mountpoints,
    find_by_name,
    find_child,
    is_disk,
    is_mounted,
    is_partition,
    is_system,
    iter_children,
    non_system,
    system,
    walk,
)
from lsblk2tree.schema import Device, DeviceCollection, DeviceType, MajMin


def _dev(name, mountpoints=(), children=None, device_type=DeviceType.DISK):
    return Device(
        name=name,
        major_minor=MajMin(major=8, minor=0),
        size_bytes=0,
        device_type=device_type,
        mountpoints=tuple(mountpoints),
        children=None if children is None else tuple(children),
    )


def _chain(depth, mountpoints):
    """Disk with a single line of descendants; the deepest one carries mountpoints."""
    node = _dev(f"n{depth}", mountpoints=mountpoints, device_type=DeviceType.LVM)
    for i in reversed(range(depth)):
        node = _dev(f"n{i}", children=[node])
    return node


def test_is_mounted_and_active_mountpoints():
    assert is_mounted(_dev("a", ["/data"]))
    assert not is_mounted(_dev("a", [None]))
    assert not is_mounted(_dev("a", []))
    d = _dev("a", [None, "/srv", None, "/var/lib"])
    assert is_mounted(d)
    assert active_mountpoints(d) == ("/srv", "/var/lib")
    assert active_mountpoints(_dev("a", [None, None])) == ()


@pytest.mark.parametrize("depth", [0, 1, 2, 5, 50])
def test_is_system_finds_root_at_any_depth(depth):
    assert is_system(_chain(depth, ["/"]))
    assert not is_system(_chain(depth, ["/home"]))
    assert not is_system(_chain(depth, [None]))


def test_is_system_needs_exact_root_path():
    assert not is_system(_dev("a", ["/root"]))
    assert not is_system(_dev("a", ["//"]))
    assert is_system(_dev("a", ["[SWAP]", "/"]))


def test_is_system_checks_every_branch():
    disk = _dev("sda", [None], children=[
        _dev("sda1", ["/boot"]),
        _dev("sda2", [None], children=[_dev("md0", ["/boot"])]),
        _dev("sda3", [None], children=[_dev("md1", [None]), _dev("md2", ["/"])]),
    ])
    assert is_system(disk)
    assert not is_system(disk.children[0])
    assert is_system(disk.children[2])


def test_system_and_non_system(mirrored_collection):
    assert [d.name for d in system(mirrored_collection)] == ["sda", "sdb"]
    assert [d.name for d in non_system(mirrored_collection)] == ["nvme0n1", "nvme1n1"]


def test_partition_keeps_subtrees_whole(bytes_collection):
    (sda,) = system(bytes_collection)
    assert sda.name == "sda"
    assert [c.name for c in sda.children] == ["sda1", "sda2"]
    assert [d.name for d in non_system(bytes_collection)] == ["loop0", "sdb", "sr0", "mpatha"]


def test_partition_of_empty_collection():
    assert system(DeviceCollection()) == ()
    assert non_system(DeviceCollection()) == ()


def test_find_by_name():
    collection = DeviceCollection(blockdevices=(_dev("sda", children=[_dev("sda1")]), _dev("sdb")))
    assert find_by_name(collection, "sdc") is None
    assert find_by_name(collection, "sdb") is collection.blockdevices[1]
    assert find_by_name(collection, "sda1") is None
    assert find_by_name(collection, "SDA") is None


def test_find_by_name_returns_first_match():
    first = _dev("sda", ["/a"])
    collection = DeviceCollection(blockdevices=(first, _dev("sda", ["/b"])))
    assert find_by_name(collection, "sda") is first


def test_find_child_does_not_recurse(mirrored_collection):
    sda = find_by_name(mirrored_collection, "sda")
    assert find_child(sda, "sda2").name == "sda2"
    assert find_child(sda, "md0") is None
    assert find_child(find_by_name(mirrored_collection, "nvme0n1"), "nvme0n1p1") is None


def test_iter_children():
    leaf = _dev("sda1")
    assert tuple(iter_children(leaf)) == ()
    assert tuple(iter_children(_dev("sdb", children=[]))) == ()
    parent = _dev("sda", children=[_dev("sda1"), _dev("sda2")])
    children = iter_children(parent)
    assert [c.name for c in children] == ["sda1", "sda2"]
    # restartable
    assert [c.name for c in children] == ["sda1", "sda2"]


def test_walk_is_preorder(mirrored_collection):
    sda = find_by_name(mirrored_collection, "sda")
    assert [d.name for d in walk(sda)] == ["sda", "sda1", "sda2", "md0"]


def test_is_disk_and_is_partition():
    collection = build({"blockdevices": [
        {"name": "sda", "maj:min": "8:0", "size": 1, "type": "disk",
         "children": [{"name": "sda1", "maj:min": "8:1", "size": 1, "type": "part"}]},
        {"name": "md0", "maj:min": "9:0", "size": 1, "type": "raid1"},
    ]})
    sda, md0 = collection.blockdevices
    assert is_disk(sda) and not is_partition(sda)
    assert is_partition(sda.children[0]) and not is_disk(sda.children[0])
    assert not is_disk(md0) and not is_partition(md0)

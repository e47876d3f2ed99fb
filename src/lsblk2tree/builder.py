"""
Device tree builder: lsblk JSON document -> DeviceCollection, and back.

The only write path into the model. Nodes are decoded with an explicit stack
instead of recursion, so nesting depth is limited by memory, not by the
interpreter's recursion limit.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

from .errors import MalformedDocument, MissingField, ParseError, SerializeError
from .normalize import classify, normalize_mountpoints, parse_flag, parse_maj_min, parse_size
from .schema import Device, DeviceCollection, DeviceType


REQUIRED_FIELDS = ("name", "maj:min", "size", "type")


def parse(text: str) -> DeviceCollection:
    """Parse the text printed by ``lsblk --json``."""
    try:
        document = json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        raise MalformedDocument(f"not valid JSON: {e}") from e
    return build(document)


def build(document: Any) -> DeviceCollection:
    """Build a DeviceCollection from an already-decoded lsblk document."""
    if not isinstance(document, dict):
        raise MalformedDocument("document must be a JSON object")
    if "blockdevices" not in document:
        raise MalformedDocument("document has no 'blockdevices' array")
    nodes = document["blockdevices"]
    if not isinstance(nodes, list):
        raise MalformedDocument("'blockdevices' must be an array", "blockdevices")
    return DeviceCollection(blockdevices=_build_devices(nodes))


def _build_devices(nodes: List[Any]) -> Tuple[Device, ...]:
    # Pass 1: decode every node in pre-order, recording each node's child indices.
    # Pass 2: construct Devices bottom-up (children always sit after their parent).
    decoded: List[Tuple[Dict[str, Any], Optional[List[int]]]] = []
    top: List[int] = []
    stack = [(node, f"blockdevices[{i}]", None) for i, node in reversed(list(enumerate(nodes)))]
    while stack:
        node, path, parent = stack.pop()
        fields, raw_children = _decode_node(node, path)
        index = len(decoded)
        decoded.append((fields, None if raw_children is None else []))
        if parent is None:
            top.append(index)
        else:
            decoded[parent][1].append(index)
        if raw_children:
            for i in reversed(range(len(raw_children))):
                stack.append((raw_children[i], f"{path}.children[{i}]", index))

    built: List[Optional[Device]] = [None] * len(decoded)
    for index in reversed(range(len(decoded))):
        fields, child_indices = decoded[index]
        children = None
        if child_indices is not None:
            children = tuple(built[i] for i in child_indices)
        built[index] = Device(children=children, **fields)
    return tuple(built[i] for i in top)


def _decode_node(node: Any, path: str) -> Tuple[Dict[str, Any], Optional[List[Any]]]:
    """Decode the scalar fields of one node. Returns (fields, raw children or None)."""
    if not isinstance(node, dict):
        raise MalformedDocument("device node must be a JSON object", path)
    for field_name in REQUIRED_FIELDS:
        if field_name not in node:
            raise MissingField(field_name, path)
    name = node["name"]
    if not isinstance(name, str) or not name:
        raise MalformedDocument(f"'name' must be a non-empty string, got {name!r}", path)
    try:
        fields = {
            "name": name,
            "major_minor": parse_maj_min(node["maj:min"]),
            "removable": parse_flag(node.get("rm", False), "rm"),
            "size_bytes": parse_size(node["size"]),
            "read_only": parse_flag(node.get("ro", False), "ro"),
            "device_type": classify(node["type"]),
            "raw_type": node["type"] if isinstance(node["type"], str) else DeviceType.OTHER.value,
            "mountpoints": normalize_mountpoints(node),
        }
    except ParseError as e:
        if e.path is None:
            e.path = path
            e.args = (f"{path}: {e.message}",)
        raise
    raw_children = node.get("children")
    if raw_children is not None and not isinstance(raw_children, list):
        raise MalformedDocument("'children' must be an array", path)
    return fields, raw_children


def to_document(collection: DeviceCollection) -> Dict[str, Any]:
    """Inverse of build(): the lsblk JSON document (MOUNTPOINTS form, sizes in bytes)."""
    out: List[Dict[str, Any]] = []
    # (device, list the node goes into)
    stack = [(d, out) for d in reversed(collection.blockdevices)]
    while stack:
        device, siblings = stack.pop()
        node: Dict[str, Any] = {
            "name": device.name,
            "maj:min": str(device.major_minor),
            "rm": device.removable,
            "size": device.size_bytes,
            "ro": device.read_only,
            "type": _type_name(device),
            "mountpoints": list(device.mountpoints),
        }
        siblings.append(node)
        if device.children is not None:
            node["children"] = []
            stack.extend((child, node["children"]) for child in reversed(device.children))
    return {"blockdevices": out}


def serialize(collection: DeviceCollection, indent: Optional[int] = 2) -> str:
    """JSON text for to_document(collection).

    json.dumps recurses per nesting level, so trees deeper than the interpreter
    recursion limit allows raise SerializeError.
    """
    document = to_document(collection)
    try:
        return json.dumps(document, indent=indent)
    except RecursionError as e:
        raise SerializeError("device tree too deeply nested to serialize") from e


def _type_name(device: Device) -> str:
    if device.raw_type or device.device_type is DeviceType.OTHER:
        return device.raw_type
    return device.device_type.value

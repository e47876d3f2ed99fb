"""
Field normalizers: size strings, mountpoint schema variants, device types, maj:min.

lsblk output differs between util-linux releases and flags (--bytes or not,
MOUNTPOINT vs MOUNTPOINTS). Everything here reconciles those variants into the
single shape the schema expects.
"""

import re
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Any, Dict, Optional, Tuple

from .errors import InvalidMajMin, InvalidSize, MalformedDocument
from .schema import U64_MAX, DeviceType, MajMin


_SIZE_RE = re.compile(r"\s*([0-9]+(?:\.[0-9]+)?)\s*([KMGTPB]?)\s*", re.IGNORECASE)
_MAJ_MIN_RE = re.compile(r"([0-9]+):([0-9]+)")

# Binary multipliers. "B" is not a multiplier suffix proper, but lsblk
# without --bytes prints "0B" for empty devices, so it is read as bytes.
SIZE_UNITS = {
    "": 1,
    "B": 1,
    "K": 1 << 10,
    "M": 1 << 20,
    "G": 1 << 30,
    "T": 1 << 40,
    "P": 1 << 50,
}

_TYPE_NAMES = {t.value: t for t in DeviceType if t is not DeviceType.OTHER}
_TYPE_NAMES["partition"] = DeviceType.PARTITION


def parse_size(raw: Any) -> int:
    """Return the byte count for an lsblk SIZE value.

    Accepts a plain integer (``--bytes`` output) or a human-readable string
    such as ``"3.5T"``. Fractional byte counts are rounded half-to-even.
    Raises InvalidSize for anything else.
    """
    if isinstance(raw, bool):
        raise InvalidSize(raw)
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            raise InvalidSize(raw)
        value = int(raw)
    elif isinstance(raw, str):
        m = _SIZE_RE.fullmatch(raw)
        if not m:
            raise InvalidSize(raw)
        number, unit = m.group(1), m.group(2).upper()
        exact = Decimal(number) * SIZE_UNITS[unit]
        value = int(exact.to_integral_value(rounding=ROUND_HALF_EVEN))
    else:
        raise InvalidSize(raw)
    if value < 0 or value > U64_MAX:
        raise InvalidSize(raw)
    return value


def format_size(size_bytes: int) -> str:
    """Human-readable size the way lsblk prints it without --bytes ("3.5T", "8M", "0B")."""
    if size_bytes < 1024:
        return f"{size_bytes}B"
    value = float(size_bytes)
    for unit in ("K", "M", "G", "T", "P"):
        value /= 1024
        if value < 1024 or unit == "P":
            break
    text = f"{value:.1f}".rstrip("0").rstrip(".")
    return f"{text}{unit}"


def normalize_mountpoints(node: Dict[str, Any]) -> Tuple[Optional[str], ...]:
    """Reconcile MOUNTPOINT (str|null) and MOUNTPOINTS ([str|null, ...]) into one tuple.

    Entries are never dropped or deduplicated: ``[null]`` (mountable, not mounted)
    stays distinct from ``()`` (no mountpoint column at all).
    """
    if "mountpoints" in node:
        raw = node["mountpoints"]
        if raw is None:
            return ()
        if not isinstance(raw, list):
            raise MalformedDocument(f"'mountpoints' must be an array, got {type(raw).__name__}")
        for entry in raw:
            if entry is not None and not isinstance(entry, str):
                raise MalformedDocument(f"mountpoint entry must be a string or null, got {entry!r}")
        return tuple(raw)
    if "mountpoint" in node:
        raw = node["mountpoint"]
        if raw is not None and not isinstance(raw, str):
            raise MalformedDocument(f"'mountpoint' must be a string or null, got {raw!r}")
        return (raw,)
    return ()


def classify(raw_type: Any) -> DeviceType:
    """Map an lsblk TYPE string onto DeviceType. Never fails."""
    if not isinstance(raw_type, str):
        return DeviceType.OTHER
    return _TYPE_NAMES.get(raw_type, DeviceType.OTHER)


def parse_maj_min(raw: Any) -> MajMin:
    """Parse ``"MAJOR:MINOR"``."""
    if not isinstance(raw, str):
        raise InvalidMajMin(raw)
    m = _MAJ_MIN_RE.fullmatch(raw)
    if not m:
        raise InvalidMajMin(raw)
    return MajMin(major=int(m.group(1)), minor=int(m.group(2)))


def parse_flag(raw: Any, field_name: str) -> bool:
    """RM/RO column: JSON bool on current util-linux, "0"/"1" (or 0/1) on older releases."""
    if isinstance(raw, bool):
        return raw
    if raw in (0, 1, "0", "1"):
        return raw in (1, "1")
    raise MalformedDocument(f"{field_name!r} must be a boolean, got {raw!r}")

"""lsblk2tree: typed, read-only view of the block device tree reported by lsblk."""

from .builder import build, parse, serialize, to_document
from .errors import (
    CommandFailed,
    CommandNotFound,
    ExecutionError,
    InvalidMajMin,
    InvalidSize,
    Lsblk2TreeError,
    MalformedDocument,
    MissingField,
    OutputEncodingError,
    ParseError,
    SerializeError,
)
from .schema import Device, DeviceCollection, DeviceType, MajMin
from .source import get_devices

__version__ = "0.1.0"

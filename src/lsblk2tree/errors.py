"""
Error taxonomy.

ParseError and its subclasses come from the core (text -> device tree).
ExecutionError and its subclasses come only from running lsblk; the core never
raises them.
"""

from typing import Any, Optional


class Lsblk2TreeError(Exception):
    """Base class for every error raised by lsblk2tree."""


# --- Parse errors (core) ---


class ParseError(Lsblk2TreeError):
    """Input text does not describe a valid device tree.

    ``path`` locates the offending node, e.g. ``blockdevices[0].children[1]``.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class MalformedDocument(ParseError):
    """Input is not the expected document shape."""


class MissingField(ParseError):
    def __init__(self, field_name: str, path: Optional[str] = None):
        self.field_name = field_name
        super().__init__(f"missing required field {field_name!r}", path)


class InvalidMajMin(ParseError):
    def __init__(self, raw: Any, path: Optional[str] = None):
        self.raw = raw
        super().__init__(f"invalid maj:min {raw!r} (expected MAJOR:MINOR)", path)


class InvalidSize(ParseError):
    def __init__(self, raw: Any, path: Optional[str] = None):
        self.raw = raw
        super().__init__(f"invalid size {raw!r}", path)


# --- Serialization errors ---


class SerializeError(Lsblk2TreeError):
    """A parsed collection could not be written back out as JSON."""


# --- Execution errors (lsblk source only) ---


class ExecutionError(Lsblk2TreeError):
    """Running the enumeration command failed before any parsing happened."""


class CommandNotFound(ExecutionError):
    def __init__(self, command: str):
        self.command = command
        super().__init__(f"{command}: command not found")


class CommandFailed(ExecutionError):
    def __init__(self, command: str, returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip()
        msg = f"{command} exited with status {returncode}"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class OutputEncodingError(ExecutionError):
    def __init__(self, command: str, reason: str = ""):
        self.command = command
        self.reason = reason
        msg = f"{command} produced output that is not valid UTF-8"
        super().__init__(f"{msg} ({reason})" if reason else msg)

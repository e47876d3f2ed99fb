"""
Device tree schema.

Strongly typed, immutable model of one lsblk snapshot. The builder is the only
code that creates these objects; everything else reads them.
"""

from enum import Enum
from typing import Iterator, Optional, Tuple

from pydantic import BaseModel, Field

U64_MAX = 2**64 - 1


class DeviceType(str, Enum):
    """Closed set of device types; anything unrecognized is OTHER."""

    DISK = "disk"
    PARTITION = "part"
    LOOP = "loop"
    RAID0 = "raid0"
    RAID1 = "raid1"
    RAID5 = "raid5"
    RAID6 = "raid6"
    RAID10 = "raid10"
    LVM = "lvm"
    CRYPT = "crypt"
    ROM = "rom"
    OTHER = "other"


class MajMin(BaseModel):
    """Kernel major:minor device number pair."""

    major: int = Field(ge=0)
    minor: int = Field(ge=0)

    model_config = {"frozen": True, "extra": "forbid"}

    def __str__(self) -> str:
        return f"{self.major}:{self.minor}"


class Device(BaseModel):
    """One lsblk node (disk, partition, md array, ...) and the devices stacked on it."""

    name: str = Field(min_length=1)
    major_minor: MajMin
    removable: bool = False
    size_bytes: int = Field(ge=0, le=U64_MAX)
    read_only: bool = False
    device_type: DeviceType
    raw_type: str = ""  # type string as printed by lsblk, e.g. "part" or "mpath"
    mountpoints: Tuple[Optional[str], ...] = ()
    # None: lsblk printed no "children" key at all
    children: Optional[Tuple["Device", ...]] = None

    model_config = {"frozen": True, "extra": "forbid"}


class DeviceCollection(BaseModel):
    """Top-level devices of one lsblk run, in output order."""

    blockdevices: Tuple[Device, ...] = ()

    model_config = {"frozen": True, "extra": "forbid"}

    def __iter__(self) -> Iterator[Device]:  # type: ignore[override]
        return iter(self.blockdevices)

    def __len__(self) -> int:
        return len(self.blockdevices)

from pathlib import Path

import pytest

from lsblk2tree.builder import parse
from lsblk2tree.executor import RunResult

FIXTURES = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text()


@pytest.fixture
def bytes_collection():
    """lsblk --bytes output: loop, encrypted root, USB stick, optical drive, multipath."""
    return parse(read_fixture("lsblk_bytes.json"))


@pytest.fixture
def mirrored_collection():
    """Two disks carrying an md RAID1 root plus two unused NVMe disks."""
    return parse(read_fixture("lsblk_mirrored_root.json"))


@pytest.fixture
def fixture_executor():
    """Executor that answers the lsblk command with fixture output."""
    calls = []

    def run(cmd, *, timeout=None):
        calls.append(list(cmd))
        if cmd and cmd[0] == "lsblk":
            return RunResult(stdout=read_fixture("lsblk_bytes.json"), stderr="", returncode=0)
        return RunResult(stdout="", stderr="unknown command", returncode=1)

    run.calls = calls
    return run

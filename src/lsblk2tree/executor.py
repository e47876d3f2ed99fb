"""
Command execution abstraction.

The lsblk source never calls subprocess directly. It uses the provided executor
so that tests can return fixture text instead of running the real command.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol

from .errors import OutputEncodingError

DEFAULT_TIMEOUT = 30


@dataclass
class RunResult:
    """Result of running a command (or reading a fixture)."""

    stdout: str
    stderr: str
    returncode: int


class Executor(Protocol):
    """Protocol for command execution. Implementations may run commands or read fixtures."""

    def __call__(self, cmd: List[str], *, timeout: Optional[float] = None) -> RunResult:
        """Execute command (or resolve to fixture). Returns stdout, stderr, returncode."""
        ...


def subprocess_executor(cmd: List[str], *, timeout: Optional[float] = None) -> RunResult:
    """Default implementation: run the command via subprocess.

    Output is captured as bytes and decoded strictly; stdout that is not valid
    UTF-8 raises OutputEncodingError rather than being silently replaced.
    """
    import subprocess
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
        )
    except subprocess.TimeoutExpired as e:
        return RunResult(
            stdout="",
            stderr=f"Command timed out after {e.timeout}s",
            returncode=-1,
        )
    except FileNotFoundError:
        return RunResult(stdout="", stderr="Command not found", returncode=127)
    except PermissionError as e:
        return RunResult(stdout="", stderr=str(e), returncode=126)
    try:
        stdout = (result.stdout or b"").decode("utf-8")
    except UnicodeDecodeError as e:
        raise OutputEncodingError(cmd[0], str(e)) from e
    return RunResult(
        stdout=stdout,
        stderr=(result.stderr or b"").decode("utf-8", errors="replace"),
        returncode=result.returncode,
    )


def make_executor(timeout: Optional[float] = None) -> Executor:
    """Create the default executor with a fixed timeout."""
    def run(cmd: List[str], *, timeout: Optional[float] = timeout) -> RunResult:
        return subprocess_executor(cmd, timeout=timeout)
    return run

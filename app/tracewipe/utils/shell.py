"""Subprocess helpers for the external tools tracewipe drives (shred, journalctl)."""

import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Exit status and captured output of one external command.

    Attributes:
        args: Command line that was run.
        returncode: Exit status.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def failure_detail(self) -> str:
        """Message recorded on an outcome when the command failed.

        The tool's own stderr when it printed any, else its exit status.
        """
        if self.stderr.strip():
            return self.stderr.strip()
        name = self.args[0] if self.args else "command"
        return f"{name} exited with status {self.returncode}"


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run a command to completion with its output captured.

    Args:
        args: Command and arguments.
        timeout: Seconds before the command is abandoned. None waits for
            it, which shred on a large file needs.

    Raises:
        subprocess.TimeoutExpired: If the command outlives the timeout.
        OSError: If the executable cannot be started.
    """
    completed = subprocess.run(args, capture_output=True, text=True, timeout=timeout)
    return CommandResult(
        args=tuple(args),
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )


def command_exists(name: str) -> bool:
    return shutil.which(name) is not None

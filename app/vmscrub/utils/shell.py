"""Shell execution utilities.

Provides subprocess execution for read-only queries (captured output)
and for destructive commands (output inherited from the terminal).
"""

import subprocess
from dataclasses import dataclass

# Shell conventions for failures that never produced an exit code
COMMAND_NOT_FOUND = 127
TIMED_OUT = 124


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
) -> CommandResult:
    """Execute a command and capture its output.

    Used for queries whose output is parsed (apt-mark showauto,
    apt-cache depends, ...). Never used for destructive commands.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(  # nosec: B603
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def run_passthrough(
    args: list[str],
    *,
    quiet: bool = False,
    timeout: float | None = None,
) -> int:
    """Execute a command with stdout/stderr inherited from the terminal.

    The command's own diagnostics reach the operator unmodified. With
    ``quiet`` only stdout is discarded; stderr is always inherited.

    Args:
        args: Command and arguments to execute.
        quiet: If True, discard the command's standard output.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        Exit code of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
        subprocess.TimeoutExpired: If command exceeds timeout.
    """
    result = subprocess.run(  # nosec: B603
        args,
        check=False,
        stdout=subprocess.DEVNULL if quiet else None,
        timeout=timeout,
    )
    return result.returncode

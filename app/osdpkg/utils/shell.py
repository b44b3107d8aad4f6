"""Shell execution utilities.

Provides safe subprocess execution with proper error handling.
"""

import shutil
import subprocess
from dataclasses import dataclass


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
    check: bool = False,
    timeout: float | None = 60.0,
) -> CommandResult:
    """Execute a command and return the result.

    Args:
        args: Command and arguments to execute.
        check: If True, raise CalledProcessError on non-zero exit.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check=True and command fails.
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=check,
        timeout=timeout,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def find_powershell() -> str | None:
    """Locate a PowerShell executable.

    Windows PowerShell is preferred since it is the one present in WinPE
    and full Windows installations; PowerShell 7 is the fallback.

    Returns:
        Executable name, or None if neither is on PATH.
    """
    for name in ("powershell", "pwsh"):
        if command_exists(name):
            return name
    return None


def run_powershell(
    script: str,
    *,
    executable: str = "powershell",
    timeout: float | None = 60.0,
) -> CommandResult:
    """Run a PowerShell script non-interactively.

    Args:
        script: Script text passed to -Command.
        executable: PowerShell executable to invoke.
        timeout: Maximum time in seconds to wait.

    Returns:
        CommandResult of the PowerShell process.
    """
    return run_command(
        [executable, "-NoProfile", "-NonInteractive", "-Command", script],
        timeout=timeout,
    )

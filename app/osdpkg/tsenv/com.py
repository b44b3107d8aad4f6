"""Task sequence environment backed by the Microsoft.SMS.TSEnvironment COM object.

The COM object is only reachable while a task sequence is running. It is
driven through PowerShell so no Windows-only Python bindings are needed.
"""

import logging
import subprocess

from osdpkg.errors import TaskSequenceEnvironmentError
from osdpkg.utils.shell import CommandResult, find_powershell, run_powershell

logger = logging.getLogger(__name__)

COM_PROG_ID = "Microsoft.SMS.TSEnvironment"


def _quote(value: str) -> str:
    """Quote a value as a PowerShell single-quoted string literal."""
    return "'" + value.replace("'", "''") + "'"


class ComTaskSequenceEnvironment:
    """Variable store of the running task sequence.

    Construction verifies the COM object can be created, so a missing task
    sequence is reported before any work is done.

    Raises:
        TaskSequenceEnvironmentError: If PowerShell is missing or the
            task sequence environment cannot be opened.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        executable = find_powershell()
        if executable is None:
            msg = "PowerShell is not available to open the task sequence environment"
            raise TaskSequenceEnvironmentError(msg)

        self._executable = executable
        self._timeout = timeout

        result = self._run(f"New-Object -ComObject {COM_PROG_ID} | Out-Null")
        if not result.success:
            msg = (
                "Unable to open the task sequence environment: "
                f"{result.stderr.strip() or 'unknown error'}"
            )
            raise TaskSequenceEnvironmentError(msg)

    def _run(self, script: str) -> CommandResult:
        try:
            return run_powershell(script, executable=self._executable, timeout=self._timeout)
        except (subprocess.TimeoutExpired, OSError) as e:
            msg = f"Task sequence environment call failed: {e}"
            raise TaskSequenceEnvironmentError(msg) from e

    def get(self, name: str) -> str:
        """Read a task sequence variable.

        Raises:
            TaskSequenceEnvironmentError: If the variable cannot be read.
        """
        result = self._run(f"(New-Object -ComObject {COM_PROG_ID}).Value({_quote(name)})")
        if not result.success:
            msg = f"Unable to read variable {name}: {result.stderr.strip() or 'unknown error'}"
            raise TaskSequenceEnvironmentError(msg)
        return result.stdout.strip()

    def set(self, name: str, value: str) -> None:
        """Write a task sequence variable.

        Raises:
            TaskSequenceEnvironmentError: If the variable cannot be written.
        """
        script = (
            f"$ts = New-Object -ComObject {COM_PROG_ID}; "
            f"$ts.Value({_quote(name)}) = {_quote(value)}"
        )
        result = self._run(script)
        if not result.success:
            msg = f"Unable to set variable {name}: {result.stderr.strip() or 'unknown error'}"
            raise TaskSequenceEnvironmentError(msg)
        logger.debug("Set task sequence variable %s=%r", name, value)

"""Task sequence environment interface.

The task sequence engine shares state between steps through named
variables. Implementations expose those variables as a simple get/set store.
"""

from typing import Protocol, runtime_checkable

# Variable holding the task sequence log directory
LOG_PATH_VARIABLE = "_SMSTSLogPath"

# Variable read by the downstream package download step
DOWNLOAD_PACKAGES_VARIABLE = "OSDDownloadDownloadPackages"


@runtime_checkable
class TaskSequenceEnvironment(Protocol):
    """Named variable store shared with the task sequence engine."""

    def get(self, name: str) -> str:
        """Return the value of a variable, or "" if it is not set."""
        ...

    def set(self, name: str, value: str) -> None:
        """Set a variable.

        Raises:
            TaskSequenceEnvironmentError: If the variable cannot be written.
        """
        ...

"""In-memory task sequence environment used for dry runs."""

import logging

logger = logging.getLogger(__name__)


class MemoryTaskSequenceEnvironment:
    """Dict-backed variable store.

    Attributes:
        variables: Current variable values.
    """

    def __init__(self, variables: dict[str, str] | None = None) -> None:
        self.variables: dict[str, str] = dict(variables or {})

    def get(self, name: str) -> str:
        return self.variables.get(name, "")

    def set(self, name: str, value: str) -> None:
        logger.debug("Setting variable %s=%r (in memory)", name, value)
        self.variables[name] = value

"""Abstract base class for hardware probes.

This module defines the HardwareProbe interface that all hardware
inventory sources must implement.
"""

from abc import ABC, abstractmethod

from osdpkg.models.machine import MachineFacts


class HardwareProbe(ABC):
    """Abstract base class for all hardware probes.

    Probes read the manufacturer, model and current firmware version
    of the local machine.

    Example:
        >>> probe = WmiProbe()
        >>> if probe.is_available():
        ...     facts = probe.probe()
        ...     print(f"{facts.manufacturer} {facts.model}")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a short name identifying this probe in logs."""

    @abstractmethod
    def probe(self) -> MachineFacts:
        """Read machine facts from the inventory.

        Returns:
            MachineFacts for the local machine.

        Raises:
            InventoryError: If the inventory query fails.
        """

    def is_available(self) -> bool:
        """Check if this inventory source can be used on the system.

        Returns:
            True if the probe can be used, False otherwise.
        """
        return True

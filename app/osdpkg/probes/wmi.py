"""WMI hardware probe implementation.

Reads the computer system and BIOS inventory through
PowerShell's Get-CimInstance and parses the JSON it emits.
"""

import json
import logging
import subprocess

from osdpkg.errors import InventoryError
from osdpkg.models.machine import MachineFacts
from osdpkg.probes.base import HardwareProbe
from osdpkg.probes.manufacturers import build_facts
from osdpkg.utils.shell import find_powershell, run_powershell

logger = logging.getLogger(__name__)


class WmiProbe(HardwareProbe):
    """Probe for Windows Management Instrumentation inventory.

    Reads the manufacturer and model from Win32_ComputerSystem and the
    firmware version from Win32_BIOS.
    """

    _SCRIPT = """
    $cs = Get-CimInstance -ClassName Win32_ComputerSystem
    $bios = Get-CimInstance -ClassName Win32_BIOS
    @{
        Manufacturer = $cs.Manufacturer
        Model = $cs.Model
        FirmwareVersion = $bios.SMBIOSBIOSVersion
    } | ConvertTo-Json -Compress
    """

    def __init__(self, timeout: float = 60.0) -> None:
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "wmi"

    def is_available(self) -> bool:
        """Check if PowerShell is available to query WMI."""
        return find_powershell() is not None

    def probe(self) -> MachineFacts:
        """Query WMI and return machine facts.

        Returns:
            MachineFacts for the local machine.

        Raises:
            InventoryError: If PowerShell is missing, the query fails,
                or its output cannot be parsed.
        """
        executable = find_powershell()
        if executable is None:
            msg = "PowerShell is not available to query the hardware inventory"
            raise InventoryError(msg)

        try:
            result = run_powershell(self._SCRIPT, executable=executable, timeout=self._timeout)
        except (subprocess.TimeoutExpired, OSError) as e:
            msg = f"Hardware inventory query failed: {e}"
            raise InventoryError(msg) from e

        if not result.success:
            msg = f"Hardware inventory query failed: {result.stderr.strip() or 'unknown error'}"
            raise InventoryError(msg)

        inventory = self._parse_inventory(result.stdout)
        logger.debug("Raw hardware inventory: %s", inventory)

        return build_facts(inventory, inventory.get("FirmwareVersion", ""))

    def _parse_inventory(self, output: str) -> dict[str, str]:
        """Parse the JSON object printed by the inventory script.

        Args:
            output: Standard output of the PowerShell script.

        Returns:
            Mapping of property name to string value (None becomes "").

        Raises:
            InventoryError: If the output is not a JSON object.
        """
        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            msg = f"Invalid hardware inventory output: {e}"
            raise InventoryError(msg) from e

        if not isinstance(data, dict):
            msg = "Invalid hardware inventory output: expected a JSON object"
            raise InventoryError(msg)

        if not data.get("Manufacturer"):
            msg = "Hardware inventory did not report a manufacturer"
            raise InventoryError(msg)

        return {str(key): "" if value is None else str(value) for key, value in data.items()}

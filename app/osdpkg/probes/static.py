"""Probe returning facts supplied by the caller.

Used for dry runs and lab testing where the hardware inventory of the
current machine is not the one being deployed.
"""

from osdpkg.models.machine import MachineFacts
from osdpkg.probes.base import HardwareProbe
from osdpkg.probes.manufacturers import build_facts, resolve_manufacturer


class StaticProbe(HardwareProbe):
    """Probe backed by fixed inventory values."""

    def __init__(self, manufacturer: str, model: str, firmware_version: str = "") -> None:
        self._manufacturer = manufacturer
        self._model = model
        self._firmware_version = firmware_version

    @property
    def name(self) -> str:
        return "static"

    def probe(self) -> MachineFacts:
        # Same vendor mapping as real inventory data
        inventory = {"Manufacturer": self._manufacturer}
        resolved = resolve_manufacturer(self._manufacturer.strip())
        if resolved is not None:
            inventory[resolved.model_property] = self._model
        return build_facts(inventory, self._firmware_version)

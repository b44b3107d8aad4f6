"""Supported hardware manufacturers.

Each supported manufacturer maps the raw inventory manufacturer string to a
canonical name and names the inventory property its model is read from.
"""

import fnmatch
from dataclasses import dataclass

from osdpkg.models.machine import MachineFacts


@dataclass(frozen=True, slots=True)
class Manufacturer:
    """A manufacturer the selector knows how to handle.

    Attributes:
        name: Canonical name, matched against catalog manufacturer fields.
        pattern: Glob recognising the raw inventory value, ignoring case.
        model_property: Inventory property holding the model for this vendor.
    """

    name: str
    pattern: str
    model_property: str

    def matches(self, raw_manufacturer: str) -> bool:
        """Check if a raw inventory manufacturer belongs to this vendor."""
        return fnmatch.fnmatchcase(raw_manufacturer.casefold(), self.pattern.casefold())


SUPPORTED_MANUFACTURERS: dict[str, Manufacturer] = {
    "Dell": Manufacturer(name="Dell", pattern="*Dell*", model_property="Model"),
}


def resolve_manufacturer(raw_manufacturer: str) -> Manufacturer | None:
    """Find the supported manufacturer for a raw inventory value.

    Args:
        raw_manufacturer: Manufacturer as reported by the inventory.

    Returns:
        Matching Manufacturer, or None if the vendor is not supported.
    """
    for manufacturer in SUPPORTED_MANUFACTURERS.values():
        if manufacturer.matches(raw_manufacturer):
            return manufacturer
    return None


def is_supported(manufacturer: str) -> bool:
    """Check if a manufacturer name is a supported canonical name."""
    return manufacturer in SUPPORTED_MANUFACTURERS


def build_facts(inventory: dict[str, str], firmware_version: str) -> MachineFacts:
    """Build MachineFacts from raw inventory properties.

    The model is only resolved for supported manufacturers; for any other
    vendor the raw manufacturer is kept and the model is left empty.

    Args:
        inventory: Inventory properties, must contain 'Manufacturer'.
        firmware_version: Current firmware version.

    Returns:
        MachineFacts with trimmed values.
    """
    raw_manufacturer = inventory.get("Manufacturer", "").strip()
    manufacturer = resolve_manufacturer(raw_manufacturer)

    if manufacturer is None:
        return MachineFacts(
            manufacturer=raw_manufacturer,
            model="",
            firmware_version=firmware_version.strip(),
        )

    return MachineFacts(
        manufacturer=manufacturer.name,
        model=inventory.get(manufacturer.model_property, "").strip(),
        firmware_version=firmware_version.strip(),
    )

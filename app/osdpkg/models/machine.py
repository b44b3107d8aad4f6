"""Machine facts read from the local hardware inventory."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MachineFacts:
    """Hardware identity of the machine being deployed.

    Read once at start of a run and never mutated.

    Attributes:
        manufacturer: Canonical manufacturer name when recognized
            (e.g., 'Dell'), otherwise the raw inventory value.
        model: Hardware model. Empty unless the manufacturer is supported.
        firmware_version: Currently installed firmware (BIOS) version.
    """

    manufacturer: str
    model: str
    firmware_version: str

    @property
    def has_model(self) -> bool:
        """Check if a model was resolved for this machine."""
        return bool(self.model)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {
            "manufacturer": self.manufacturer,
            "model": self.model,
            "firmware_version": self.firmware_version,
        }

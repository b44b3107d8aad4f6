"""Package catalog models.

This module defines the record returned by the package service for each
package known to the catalog.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """A package as described by the remote catalog.

    Records are sourced entirely from the service response and are never
    persisted locally.

    Attributes:
        package_id: Opaque package identifier (e.g., 'P0100042').
        name: Display name, expected to contain the hardware model.
        manufacturer: Manufacturer the package was published for.
        created: Creation timestamp of the package (timezone-aware).
        version: Package version string (if available).
        language: Package language (if available).
        description: Package description (if available).
    """

    package_id: str
    name: str
    manufacturer: str
    created: datetime
    version: str | None = field(default=None)
    language: str | None = field(default=None)
    description: str | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.package_id:
            msg = "Package identifier cannot be empty"
            raise ValueError(msg)
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "package_id": self.package_id,
            "name": self.name,
            "manufacturer": self.manufacturer,
            "created": self.created.isoformat(),
            "version": self.version,
            "language": self.language,
            "description": self.description,
        }

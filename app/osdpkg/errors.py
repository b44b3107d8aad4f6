"""Exception hierarchy for osdpkg.

Every fatal condition of a selection run is an OsdpkgError subclass, so the
CLI can log it and exit with a non-zero status in one place.
"""


class OsdpkgError(Exception):
    """Base exception for all osdpkg errors."""


class InventoryError(OsdpkgError):
    """Raised when the hardware inventory cannot be queried."""


class TaskSequenceEnvironmentError(OsdpkgError):
    """Raised when the task sequence environment cannot be read or written."""


class ServiceError(OsdpkgError):
    """Base exception for package service errors."""


class ServiceConnectionError(ServiceError):
    """Raised when the package service is unreachable or rejects the caller."""


class ServiceQueryError(ServiceError):
    """Raised when the package service answers with an error or bad data."""


class SelectionError(OsdpkgError):
    """Base exception for package selection errors."""


class UnsupportedManufacturerError(SelectionError):
    """Raised when the detected manufacturer is not supported."""

    def __init__(self, manufacturer: str) -> None:
        self.manufacturer = manufacturer
        super().__init__(f"Manufacturer '{manufacturer}' is not supported")


class NoMatchingPackageError(SelectionError):
    """Raised when no package matches the detected model and manufacturer."""

    def __init__(self, manufacturer: str, model: str) -> None:
        self.manufacturer = manufacturer
        self.model = model
        super().__init__(
            f"No package found matching manufacturer '{manufacturer}' and model '{model}'"
        )


class ConfigError(OsdpkgError):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""

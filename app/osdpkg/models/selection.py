"""Selection result model."""

from dataclasses import dataclass

from osdpkg.models.package import PackageRecord


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """Outcome of a successful selection run.

    Attributes:
        package: The selected package record.
        match_count: Number of catalog packages that matched the machine.
        variable_name: Task sequence variable the identifier was written to.
    """

    package: PackageRecord
    match_count: int
    variable_name: str

    @property
    def package_id(self) -> str:
        """Return the selected package identifier."""
        return self.package.package_id

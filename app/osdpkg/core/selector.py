"""Package matching and selection.

Matches catalog packages against the detected machine and picks the one
to deploy.
"""

import logging
from collections.abc import Iterable

from osdpkg.errors import NoMatchingPackageError, SelectionError, UnsupportedManufacturerError
from osdpkg.models.machine import MachineFacts
from osdpkg.models.package import PackageRecord
from osdpkg.probes.manufacturers import is_supported

logger = logging.getLogger(__name__)


def package_matches(record: PackageRecord, facts: MachineFacts) -> bool:
    """Check if a package applies to the given machine.

    Matching is case-sensitive and substring-based: the package name must
    contain the model and the package manufacturer must contain the
    detected manufacturer (so 'Dell Inc.' matches 'Dell').

    Args:
        record: Catalog package.
        facts: Detected machine facts.

    Returns:
        True if the package applies to the machine.
    """
    return facts.model in record.name and facts.manufacturer in record.manufacturer


def match_packages(records: Iterable[PackageRecord], facts: MachineFacts) -> list[PackageRecord]:
    """Filter catalog packages down to those matching the machine.

    Args:
        records: Catalog packages.
        facts: Detected machine facts.

    Returns:
        Matching packages in catalog order.

    Raises:
        UnsupportedManufacturerError: If the manufacturer is not supported
            or no model was resolved for it.
    """
    if not is_supported(facts.manufacturer) or not facts.has_model:
        raise UnsupportedManufacturerError(facts.manufacturer)

    matches = [record for record in records if package_matches(record, facts)]
    logger.debug(
        "%d packages match manufacturer %r and model %r",
        len(matches),
        facts.manufacturer,
        facts.model,
    )
    return matches


def newest_package(candidates: list[PackageRecord]) -> PackageRecord:
    """Return the most recently created package.

    Ties on creation timestamp go to the lexicographically smallest
    package identifier.

    Args:
        candidates: Non-empty list of packages.

    Returns:
        The newest package.
    """
    by_id = sorted(candidates, key=lambda p: p.package_id)
    # sorted() is stable, so equal timestamps keep identifier order
    return sorted(by_id, key=lambda p: p.created, reverse=True)[0]


def select_package(
    records: Iterable[PackageRecord],
    facts: MachineFacts,
) -> tuple[PackageRecord, int]:
    """Select the package to deploy on the machine.

    Args:
        records: Catalog packages.
        facts: Detected machine facts.

    Returns:
        Tuple of (selected package, number of matching packages).

    Raises:
        UnsupportedManufacturerError: If the manufacturer is not supported.
        NoMatchingPackageError: If no package matches.
        SelectionError: If the match count is otherwise invalid.
    """
    matches = match_packages(records, facts)
    count = len(matches)

    if count == 0:
        raise NoMatchingPackageError(facts.manufacturer, facts.model)

    if count == 1:
        logger.info("Found exactly one matching package: %s", matches[0].package_id)
        return matches[0], count

    if count > 1:
        selected = newest_package(matches)
        logger.info(
            "Found %d matching packages, selected newest: %s (created %s)",
            count,
            selected.package_id,
            selected.created.isoformat(),
        )
        return selected, count

    msg = f"Invalid number of matching packages: {count}"
    raise SelectionError(msg)

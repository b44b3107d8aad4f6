"""Selection pipeline.

Runs probe, catalog query, selection and publishing in order. Every failure
propagates as an OsdpkgError; the task sequence variable is only written
once a package has been selected.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from osdpkg.core.selector import select_package
from osdpkg.models.selection import SelectionResult
from osdpkg.tsenv.base import DOWNLOAD_PACKAGES_VARIABLE

if TYPE_CHECKING:
    from osdpkg.probes.base import HardwareProbe
    from osdpkg.service.client import PackageServiceClient
    from osdpkg.tsenv.base import TaskSequenceEnvironment

logger = logging.getLogger(__name__)


def run_selection(
    probe: HardwareProbe,
    client: PackageServiceClient,
    environment: TaskSequenceEnvironment,
    secret: str,
    filter: str = "",
    variable_name: str = DOWNLOAD_PACKAGES_VARIABLE,
) -> SelectionResult:
    """Select the package for this machine and publish its identifier.

    Args:
        probe: Hardware probe reading the machine facts.
        client: Package catalog client.
        environment: Task sequence variable store to publish to.
        secret: Shared secret for the catalog service.
        filter: Server-side catalog filter.
        variable_name: Variable receiving the selected package identifier.

    Returns:
        SelectionResult describing the selected package.

    Raises:
        InventoryError: If the hardware inventory cannot be read.
        ServiceError: If the catalog cannot be queried.
        SelectionError: If no single package can be selected.
        TaskSequenceEnvironmentError: If the variable cannot be written.
    """
    facts = probe.probe()
    logger.info("Manufacturer determined as: %s", facts.manufacturer)
    logger.info("Computer model determined as: %s", facts.model or "<unknown>")
    logger.info("Current firmware version: %s", facts.firmware_version or "<unknown>")

    logger.info("Retrieving packages from web service (filter=%r)", filter)
    records = client.list_packages(secret, filter)
    logger.info("Retrieved %d packages from web service", len(records))

    package, match_count = select_package(records, facts)
    logger.info("Selected package %s: %s", package.package_id, package.name)

    environment.set(variable_name, package.package_id)
    logger.info("Set task sequence variable %s to %s", variable_name, package.package_id)

    return SelectionResult(
        package=package,
        match_count=match_count,
        variable_name=variable_name,
    )

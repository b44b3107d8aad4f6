"""Package catalog web service client.

Calls the catalog's GetCMPackage operation over its HTTP POST binding and
parses the XML array of packages it returns.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import UTC, datetime
from types import TracebackType

import httpx

from osdpkg.errors import ServiceConnectionError, ServiceQueryError
from osdpkg.models.package import PackageRecord

logger = logging.getLogger(__name__)

LIST_PACKAGES_OPERATION = "GetCMPackage"

# Status codes meaning the secret key was rejected
_AUTH_STATUS_CODES = {401, 403}


def _local_name(tag: str) -> str:
    """Strip an XML namespace from an element tag."""
    return tag.rsplit("}", 1)[-1]


def parse_timestamp(value: str) -> datetime:
    """Parse a catalog creation timestamp.

    Naive timestamps are taken as UTC so all records compare consistently.

    Args:
        value: ISO 8601 date or date-time string.

    Returns:
        Timezone-aware datetime.

    Raises:
        ValueError: If the value is not a valid ISO 8601 timestamp.
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_packages(document: str) -> list[PackageRecord]:
    """Parse the XML document returned by GetCMPackage.

    Args:
        document: XML text whose children are CMPackage elements.

    Returns:
        Package records in service order.

    Raises:
        ServiceQueryError: If the XML is malformed or a record is invalid.
    """
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        msg = f"Invalid response from package service: {e}"
        raise ServiceQueryError(msg) from e

    records: list[PackageRecord] = []
    for element in root:
        if _local_name(element.tag) != "CMPackage":
            continue
        fields = {_local_name(child.tag): (child.text or "").strip() for child in element}
        records.append(_record_from_fields(fields))
    return records


def _record_from_fields(fields: dict[str, str]) -> PackageRecord:
    """Build a PackageRecord from CMPackage child elements.

    Raises:
        ServiceQueryError: If required fields are missing or invalid.
    """
    package_id = fields.get("PackageID", "")
    created = fields.get("PackageCreated", "")
    if not created:
        msg = f"Package '{package_id or '?'}' has no creation timestamp"
        raise ServiceQueryError(msg)

    try:
        return PackageRecord(
            package_id=package_id,
            name=fields.get("PackageName", ""),
            manufacturer=fields.get("PackageManufacturer", ""),
            created=parse_timestamp(created),
            version=fields.get("PackageVersion") or None,
            language=fields.get("PackageLanguage") or None,
            description=fields.get("PackageDescription") or None,
        )
    except ValueError as e:
        msg = f"Invalid package record '{package_id or '?'}': {e}"
        raise ServiceQueryError(msg) from e


class PackageServiceClient:
    """Client for the package catalog web service.

    One outbound connection, no retries: every failure is reported to the
    caller as a ServiceError.

    Example:
        >>> with PackageServiceClient("http://server/ConfigMgrWebService/ConfigMgr.asmx") as c:
        ...     packages = c.list_packages("secret", filter="Drivers")
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def __enter__(self) -> PackageServiceClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection."""
        if not self._client.is_closed:
            self._client.close()

    def list_packages(self, secret: str, filter: str = "") -> list[PackageRecord]:
        """List catalog packages, optionally pre-filtered by the server.

        Args:
            secret: Shared secret key accepted by the service.
            filter: Server-side text filter; empty returns all packages.

        Returns:
            Package records returned by the service.

        Raises:
            ServiceConnectionError: If the service is unreachable or rejects the secret.
            ServiceQueryError: If the service reports an error or returns bad data.
        """
        url = f"{self.endpoint}/{LIST_PACKAGES_OPERATION}"
        logger.debug("Calling %s (filter=%r)", url, filter)

        try:
            response = self._client.post(url, data={"SecretKey": secret, "Filter": filter})
        except httpx.TimeoutException as e:
            msg = f"Timed out connecting to package service at {self.endpoint}"
            raise ServiceConnectionError(msg) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            msg = f"Unable to connect to package service at {self.endpoint}: {e}"
            raise ServiceConnectionError(msg) from e

        if response.status_code in _AUTH_STATUS_CODES:
            msg = f"Package service rejected the request (HTTP {response.status_code})"
            raise ServiceConnectionError(msg)

        if response.status_code >= 400:
            detail = response.text.strip()[:200] or response.reason_phrase
            msg = f"Package service query failed (HTTP {response.status_code}): {detail}"
            raise ServiceQueryError(msg)

        packages = parse_packages(response.text)
        logger.debug("Package service returned %d packages", len(packages))
        return packages

"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from osdpkg.logs.cmtrace import PACKAGE_LOGGER, CMTraceHandler
from osdpkg.models.machine import MachineFacts


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Close log handlers attached by a test."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, CMTraceHandler):
            logger.removeHandler(handler)
            handler.close()


@pytest.fixture
def dell_facts() -> MachineFacts:
    """Facts for a Dell Latitude 7490."""
    return MachineFacts(manufacturer="Dell", model="7490", firmware_version="1.10.0")


@pytest.fixture
def mock_catalog_xml() -> str:
    """Sample GetCMPackage response."""
    return """<?xml version="1.0" encoding="utf-8"?>
<ArrayOfCMPackage xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xmlns="http://www.scconfigmgr.com">
  <CMPackage>
    <PackageID>P0100001</PackageID>
    <PackageName>BIOS Update - Dell Latitude 7490</PackageName>
    <PackageManufacturer>Dell</PackageManufacturer>
    <PackageLanguage>English</PackageLanguage>
    <PackageVersion>1.9.1</PackageVersion>
    <PackageCreated>2020-01-01T10:00:00</PackageCreated>
    <PackageDescription>Dell Latitude 7490 BIOS</PackageDescription>
  </CMPackage>
  <CMPackage>
    <PackageID>P0100002</PackageID>
    <PackageName>BIOS Update - Dell Latitude 7490</PackageName>
    <PackageManufacturer>Dell Inc.</PackageManufacturer>
    <PackageLanguage>English</PackageLanguage>
    <PackageVersion>1.12.0</PackageVersion>
    <PackageCreated>2021-06-01T08:30:00</PackageCreated>
    <PackageDescription />
  </CMPackage>
  <CMPackage>
    <PackageID>P0100003</PackageID>
    <PackageName>BIOS Update - HP EliteBook 840 G5</PackageName>
    <PackageManufacturer>Hewlett-Packard</PackageManufacturer>
    <PackageCreated>2022-03-15T12:00:00</PackageCreated>
  </CMPackage>
</ArrayOfCMPackage>"""


@pytest.fixture
def mock_inventory_output() -> str:
    """Sample output of the WMI inventory script."""
    return (
        '{"Manufacturer":"Dell Inc.","Model":"Latitude 7490 ","FirmwareVersion":" 1.10.0"}'
    )

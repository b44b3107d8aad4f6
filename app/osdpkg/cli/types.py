"""Shared types and utilities for CLI commands.

This module provides helpers used across multiple CLI command modules
to avoid code duplication.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, NoReturn

import typer
from pydantic import ValidationError

from osdpkg.config import SelectorConfig, load_config
from osdpkg.errors import ConfigError, OsdpkgError
from osdpkg.probes.base import HardwareProbe
from osdpkg.probes.static import StaticProbe
from osdpkg.probes.wmi import WmiProbe
from osdpkg.utils.formatting import print_error

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def fail(error: OsdpkgError | str) -> NoReturn:
    """Log a fatal error, print it and exit with status 1.

    Args:
        error: The error or message to report.

    Raises:
        typer.Exit: Always, with code 1.
    """
    message = str(error)
    logger.error("%s", message)
    print_error(message)
    raise typer.Exit(code=1)


def get_probe(
    manufacturer: str | None = None,
    model: str | None = None,
    firmware_version: str | None = None,
) -> HardwareProbe:
    """Get the hardware probe for the given options.

    Inventory values given on the command line take the place of the
    local hardware inventory.

    Args:
        manufacturer: Manufacturer override.
        model: Model override.
        firmware_version: Firmware version override.

    Returns:
        StaticProbe when a manufacturer is given, WmiProbe otherwise.
    """
    if manufacturer is not None:
        return StaticProbe(manufacturer, model or "", firmware_version or "")
    return WmiProbe()


def load_selector_config(ctx: typer.Context, **overrides: Any) -> SelectorConfig:
    """Load the config file and apply command line overrides.

    Args:
        ctx: Typer context carrying the global --config option.
        **overrides: Setting values given on the command line (None = unset).

    Returns:
        Effective SelectorConfig.

    Raises:
        ConfigError: If the config file or an option value is invalid.
    """
    obj = ctx.find_root().obj or {}
    config_path: Path | None = obj.get("config_path")
    config = load_config(config_path)
    try:
        return config.merged(**overrides)
    except ValidationError as e:
        raise ConfigError(f"Invalid option value: {e}") from e


def resolve_config(ctx: typer.Context, **overrides: Any) -> SelectorConfig:
    """Like load_selector_config, but exits with status 1 on errors."""
    try:
        return load_selector_config(ctx, **overrides)
    except ConfigError as e:
        fail(e)

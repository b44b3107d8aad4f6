"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from osdpkg.core.theme import build_theme, severity_style
from osdpkg.logs.cmtrace import SEVERITY_ERROR, SEVERITY_INFO, SEVERITY_WARNING

if TYPE_CHECKING:
    from osdpkg.models.package import PackageRecord


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
_THEME = build_theme()
console = Console(theme=_THEME, color_system=_detect_color_system())
err_console = Console(theme=_THEME, stderr=True, color_system=_detect_color_system())


def create_package_table(title: str = "Catalog Packages") -> Table:
    """Create a pre-configured table for displaying catalog packages.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for package display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Package ID", no_wrap=True)
    table.add_column("Name")
    table.add_column("Manufacturer", style="muted")
    table.add_column("Created", style="info", no_wrap=True)
    return table


def format_package_row(pkg: PackageRecord, matched: bool = False) -> tuple[str, str, str, str, str]:
    """Format a package as a table row with proper styling.

    Packages matching the machine get a filled circle and highlight color.

    Args:
        pkg: The catalog package to format.
        matched: Whether the package matches the machine.

    Returns:
        Tuple of (icon, package_id, name, manufacturer, created) with Rich markup.
    """
    style = "package_match" if matched else "package_other"
    icon = f"[{style}]●[/]" if matched else f"[{style}]○[/]"

    return (
        icon,
        f"[{style}]{pkg.package_id}[/]",
        f"[text]{pkg.name}[/]",
        f"[muted]{pkg.manufacturer or '-'}[/]",
        f"[info]{pkg.created:%Y-%m-%d %H:%M}[/]",
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[{severity_style(SEVERITY_INFO)}]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[{severity_style(SEVERITY_WARNING)}]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[{severity_style(SEVERITY_ERROR)}]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")

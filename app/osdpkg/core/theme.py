"""Console colors for osdpkg.

Console messages use the three CMTrace severity types, so an on-screen
warning and a type 2 log line read the same way.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from rich.theme import Theme

from osdpkg.logs.cmtrace import SEVERITY_ERROR, SEVERITY_INFO, SEVERITY_WARNING

HexColor = Annotated[str, Field(pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$")]


class ThemeColors(BaseModel):
    """Colors used by the console output (#RGB or #RRGGBB)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"
    success: HexColor = "#03b971"

    # One per CMTrace severity type
    information: HexColor = "#0ec1c8"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"

    package_match: HexColor = "#69B9A1"
    package_other: HexColor = "#226666"


SEVERITY_STYLES: dict[int, str] = {
    SEVERITY_INFO: "info",
    SEVERITY_WARNING: "warning",
    SEVERITY_ERROR: "error",
}


def severity_style(severity: int) -> str:
    """Get the style name for a CMTrace severity type."""
    return SEVERITY_STYLES.get(severity, "text")


def build_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for the console.

    Args:
        colors: Colors to use; defaults to ThemeColors().

    Returns:
        Rich Theme with the severity and package styles.
    """
    colors = colors or ThemeColors()
    return Theme(
        {
            "text": colors.text,
            "muted": colors.muted,
            "bold_header": f"bold {colors.header}",
            "border": colors.border,
            "success": colors.success,
            "info": colors.information,
            "warning": colors.warning,
            "error": f"bold {colors.error}",
            "package_match": f"bold {colors.package_match}",
            "package_other": colors.package_other,
            "dim": colors.muted,
        }
    )

"""CLI package for osdpkg.

This package contains the Typer application and all subcommands.
"""

from osdpkg.cli.main import app

__all__ = ["app"]

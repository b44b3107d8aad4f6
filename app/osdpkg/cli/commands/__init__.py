"""CLI commands for osdpkg.

This package contains all subcommand implementations.
"""

from osdpkg.cli.commands import config, packages, probe, select

__all__ = ["config", "packages", "probe", "select"]

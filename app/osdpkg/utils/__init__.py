"""Utility modules for osdpkg."""

from osdpkg.utils.shell import CommandResult, command_exists, run_command

__all__ = ["CommandResult", "command_exists", "run_command"]

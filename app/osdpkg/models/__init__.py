"""Data models for osdpkg.

This module exports the core data structures used throughout the application.
"""

from osdpkg.models.machine import MachineFacts
from osdpkg.models.package import PackageRecord
from osdpkg.models.selection import SelectionResult

__all__ = [
    "MachineFacts",
    "PackageRecord",
    "SelectionResult",
]

"""Task sequence variable stores.

This module exports the environment interface and its implementations.
"""

from osdpkg.tsenv.base import (
    DOWNLOAD_PACKAGES_VARIABLE,
    LOG_PATH_VARIABLE,
    TaskSequenceEnvironment,
)
from osdpkg.tsenv.com import ComTaskSequenceEnvironment
from osdpkg.tsenv.memory import MemoryTaskSequenceEnvironment

__all__ = [
    "DOWNLOAD_PACKAGES_VARIABLE",
    "LOG_PATH_VARIABLE",
    "ComTaskSequenceEnvironment",
    "MemoryTaskSequenceEnvironment",
    "TaskSequenceEnvironment",
]

"""Hardware probes for reading machine facts.

This module exports the probe classes and the supported manufacturer registry.
"""

from osdpkg.probes.base import HardwareProbe
from osdpkg.probes.manufacturers import SUPPORTED_MANUFACTURERS, Manufacturer
from osdpkg.probes.static import StaticProbe
from osdpkg.probes.wmi import WmiProbe

__all__ = [
    "SUPPORTED_MANUFACTURERS",
    "HardwareProbe",
    "Manufacturer",
    "StaticProbe",
    "WmiProbe",
]

"""Scanners for mounted volumes and the processes blocking them.

This module exports the scanner classes used before ejecting a volume.
"""

from diskfree.scanners.lsof import LsofScanner
from diskfree.scanners.volumes import VolumeScanner

__all__ = ["LsofScanner", "VolumeScanner"]

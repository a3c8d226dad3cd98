"""Operators that act on blocking processes and volumes.

This module exports the process terminator and the disk ejector.
"""

from diskfree.operators.eject import DiskEjector
from diskfree.operators.process import ProcessTerminator, closed_count, is_alive

__all__ = ["DiskEjector", "ProcessTerminator", "closed_count", "is_alive"]

"""diskfree - eject stubborn macOS disks without logging out."""

__version__ = "0.1.0"

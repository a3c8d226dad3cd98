"""Volume enumeration under the macOS mount root."""

import logging
from pathlib import Path

from diskfree.core.paths import MOUNT_ROOT
from diskfree.core.reserved import is_reserved_volume

logger = logging.getLogger(__name__)


class VolumeScanner:
    """Lists the removable volumes mounted under the mount root.

    Boot volume partitions are excluded. The scanner is read-only and
    never raises for an unreadable mount root.

    Example:
        >>> scanner = VolumeScanner()
        >>> for name in scanner.scan():
        ...     print(scanner.path_for(name))
    """

    def __init__(self, mount_root: Path = MOUNT_ROOT) -> None:
        """Initialize the scanner.

        Args:
            mount_root: Directory under which volumes are mounted.
        """
        self._mount_root = mount_root

    @property
    def mount_root(self) -> Path:
        """Return the directory scanned for volumes."""
        return self._mount_root

    def scan(self) -> list[str]:
        """List volume names in filesystem listing order.

        Only visible subdirectories count as volumes; stray files and
        hidden entries such as .timemachine are ignored.

        Returns:
            Names of non-reserved volumes, or an empty list if the mount
            root cannot be read.
        """
        try:
            entries = [entry for entry in self._mount_root.iterdir() if entry.is_dir()]
        except OSError as e:
            logger.debug("Cannot list mount root %s: %s", self._mount_root, e)
            return []

        return [
            entry.name
            for entry in entries
            if not entry.name.startswith(".") and not is_reserved_volume(entry.name)
        ]

    def path_for(self, name: str) -> Path:
        """Return the mount path of a volume."""
        return self._mount_root / name

    def exists(self, name: str) -> bool:
        """Check if a volume with this name is mounted.

        Names that would escape the mount root are never valid.

        Args:
            name: Volume name as given by the user.

        Returns:
            True if the name refers to a directory directly under the mount root.
        """
        if not name or name in (".", "..") or "/" in name:
            return False
        return self.path_for(name).is_dir()

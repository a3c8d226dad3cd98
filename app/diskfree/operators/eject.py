"""Disk ejector backed by diskutil.

Tries a normal unmount first and falls back to a forced unmount of the
same path. Both tiers unmount every volume on the physical disk.
"""

import logging
import subprocess
from pathlib import Path

from diskfree.core.paths import MOUNT_ROOT
from diskfree.models.result import EjectAttempt, EjectResult, EjectTier
from diskfree.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class DiskEjector:
    """Unmounts volumes with diskutil.

    Attributes:
        dry_run: If True, report the eject without running diskutil.
    """

    def __init__(self, mount_root: Path = MOUNT_ROOT, dry_run: bool = False) -> None:
        """Initialize the ejector.

        Args:
            mount_root: Directory under which volumes are mounted.
            dry_run: If True, simulate without unmounting.
        """
        self._mount_root = mount_root
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if ejector is in dry-run mode."""
        return self._dry_run

    def is_available(self) -> bool:
        """Check if diskutil is available."""
        return command_exists("diskutil")

    def eject(self, volume: str) -> EjectResult:
        """Eject a volume, escalating to a forced unmount on failure.

        Args:
            volume: Volume name under the mount root.

        Returns:
            EjectResult listing every attempt made.
        """
        if self._dry_run:
            logger.info("Dry-run: would eject %s", volume)
            return EjectResult(
                volume=volume,
                attempts=(EjectAttempt(tier=EjectTier.NORMAL, success=True),),
                dry_run=True,
            )

        path = str(self._mount_root / volume)

        normal = self._unmount(path, EjectTier.NORMAL)
        if normal.success:
            return EjectResult(volume=volume, attempts=(normal,))

        force = self._unmount(path, EjectTier.FORCE)
        return EjectResult(volume=volume, attempts=(normal, force))

    def _unmount(self, path: str, tier: EjectTier) -> EjectAttempt:
        """Run a single diskutil unmountDisk invocation.

        Args:
            path: Mount path of the volume.
            tier: NORMAL or FORCE.

        Returns:
            EjectAttempt with the outcome.
        """
        if not self.is_available():
            return EjectAttempt(tier=tier, success=False, error="diskutil not found")

        args = ["diskutil", "unmountDisk"]
        if tier == EjectTier.FORCE:
            args.append("force")
        args.append(path)

        logger.info("Running %s", " ".join(args))
        try:
            result = run_command(args, timeout=120.0)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("%s unmount of %s failed: %s", tier.value, path, e)
            return EjectAttempt(tier=tier, success=False, error=str(e))

        if not result.success:
            error = result.stderr.strip() or result.stdout.strip() or "diskutil failed"
            logger.warning("%s unmount of %s failed: %s", tier.value, path, error)
            return EjectAttempt(tier=tier, success=False, error=error)

        return EjectAttempt(tier=tier, success=True)

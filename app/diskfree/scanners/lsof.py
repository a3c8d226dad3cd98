"""Open-handle scanner backed by lsof.

Finds every process holding a file open anywhere under a volume's
mount path.
"""

import logging
import subprocess
from pathlib import Path

from diskfree.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class LsofScanner:
    """Scanner for processes with open handles under a directory.

    A missing or failing lsof yields an empty report, exactly like a
    volume nothing is using. Callers proceed to eject in both cases and
    let the unmount itself surface any remaining problem.
    """

    def __init__(self, timeout: float = 60.0) -> None:
        """Initialize the scanner.

        Args:
            timeout: Maximum seconds to wait for lsof to walk the volume.
        """
        self._timeout = timeout

    def is_available(self) -> bool:
        """Check if lsof is available."""
        return command_exists("lsof")

    def scan(self, path: Path | str) -> str:
        """Report processes holding handles under a path.

        Args:
            path: Mount path of the volume.

        Returns:
            lsof output without its header line, or an empty string if
            nothing is open or lsof could not run.
        """
        if not self.is_available():
            logger.debug("lsof not found, treating %s as not busy", path)
            return ""

        try:
            # +D walks the whole directory tree below path
            result = run_command(["lsof", "+D", str(path)], timeout=self._timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("lsof failed on %s: %s", path, e)
            return ""

        # lsof exits 1 both when nothing is open and when some paths were
        # unreadable, so stdout is the only signal
        if result.stderr.strip():
            logger.debug("lsof stderr for %s: %s", path, result.stderr.strip())

        lines = result.stdout.splitlines()
        return "\n".join(lines[1:])

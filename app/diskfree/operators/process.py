"""Process terminator for user applications blocking a volume.

Each user process gets SIGTERM, a bounded grace period to exit, and a
SIGKILL if it is still alive afterwards. System processes are never
signalled.
"""

import logging
import os
import signal
import time
from collections.abc import Callable, Sequence

from diskfree.models.blocker import BlockerRecord
from diskfree.models.result import TerminationOutcome, TerminationResult

logger = logging.getLogger(__name__)


def is_alive(pid: int) -> bool:
    """Check if a process exists.

    Args:
        pid: Process identifier.

    Returns:
        True if the process exists, including processes owned by other
        users that we cannot signal.
    """
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


class ProcessTerminator:
    """Closes blocking user processes with graceful-then-forced escalation.

    Failures are isolated per process: a process that cannot be
    signalled or survives SIGKILL is reported and the next one is tried.

    Attributes:
        dry_run: If True, report what would be closed without sending signals.
    """

    def __init__(
        self,
        dry_run: bool = False,
        *,
        grace_period: int = 5,
        poll_interval: float = 1.0,
        settle_time: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the terminator.

        Args:
            dry_run: If True, simulate without sending signals.
            grace_period: Number of liveness polls after SIGTERM.
            poll_interval: Seconds between liveness polls.
            settle_time: Seconds to wait after SIGKILL before the final check.
            sleep: Sleep function, replaceable in tests.
        """
        self._dry_run = dry_run
        self._grace_period = grace_period
        self._poll_interval = poll_interval
        self._settle_time = settle_time
        self._sleep = sleep

    @property
    def dry_run(self) -> bool:
        """Check if terminator is in dry-run mode."""
        return self._dry_run

    def terminate_all(
        self,
        records: Sequence[BlockerRecord],
        on_start: Callable[[BlockerRecord], None] | None = None,
        on_done: Callable[[TerminationResult], None] | None = None,
    ) -> list[TerminationResult]:
        """Close every user process in the list.

        Args:
            records: Blockers from a single scan.
            on_start: Called before each user process is signalled.
            on_done: Called with each user process result as soon as it is known.

        Returns:
            One TerminationResult per input record, in the same order.
        """
        results: list[TerminationResult] = []

        for record in records:
            if record.is_system:
                results.append(TerminationResult(record=record, outcome=TerminationOutcome.SKIPPED))
                continue

            if on_start is not None:
                on_start(record)
            result = self.terminate(record)
            if on_done is not None:
                on_done(result)
            results.append(result)

        return results

    def terminate(self, record: BlockerRecord) -> TerminationResult:
        """Close a single process.

        Args:
            record: Blocker to close.

        Returns:
            TerminationResult describing the final state of the process.
        """
        if self._dry_run:
            logger.info("Dry-run: would terminate %s (PID %d)", record.name, record.pid)
            return TerminationResult(
                record=record,
                outcome=TerminationOutcome.GRACEFUL,
                dry_run=True,
            )

        try:
            os.kill(record.pid, signal.SIGTERM)
        except ProcessLookupError:
            logger.debug("PID %d exited before SIGTERM", record.pid)
            return TerminationResult(record=record, outcome=TerminationOutcome.GRACEFUL)
        except OSError as e:
            logger.warning("Cannot signal %s (PID %d): %s", record.name, record.pid, e)
            return TerminationResult(
                record=record,
                outcome=TerminationOutcome.SIGNAL_FAILED,
                error=e.strerror or str(e),
            )

        logger.info("Sent SIGTERM to %s (PID %d)", record.name, record.pid)

        waited = 0
        while is_alive(record.pid) and waited < self._grace_period:
            self._sleep(self._poll_interval)
            waited += 1

        if not is_alive(record.pid):
            return TerminationResult(record=record, outcome=TerminationOutcome.GRACEFUL)

        logger.info("%s (PID %d) ignored SIGTERM, sending SIGKILL", record.name, record.pid)
        try:
            os.kill(record.pid, signal.SIGKILL)
        except OSError as e:
            logger.debug("SIGKILL to PID %d failed: %s", record.pid, e)
        self._sleep(self._settle_time)

        if is_alive(record.pid):
            return TerminationResult(record=record, outcome=TerminationOutcome.STILL_RUNNING)
        return TerminationResult(record=record, outcome=TerminationOutcome.FORCED)


def closed_count(results: list[TerminationResult]) -> int:
    """Count processes that are no longer running."""
    return sum(1 for r in results if r.closed)

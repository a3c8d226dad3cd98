"""Result models for termination and ejection.

This module defines data structures capturing the outcome of closing
blocking processes and unmounting a volume.
"""

from dataclasses import dataclass, field
from enum import Enum

from diskfree.models.blocker import BlockerRecord


class TerminationOutcome(Enum):
    """Final state of a single process after a close attempt.

    Attributes:
        GRACEFUL: Exited after SIGTERM within the grace period.
        FORCED: Exited after SIGKILL within the settle period.
        STILL_RUNNING: Survived SIGKILL.
        SIGNAL_FAILED: SIGTERM could not be delivered (e.g., permission denied).
        SKIPPED: System process, never signalled.
    """

    GRACEFUL = "graceful"
    FORCED = "forced"
    STILL_RUNNING = "still_running"
    SIGNAL_FAILED = "signal_failed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class TerminationResult:
    """Result of trying to close one blocking process.

    Attributes:
        record: The blocker that was targeted.
        outcome: What happened to the process.
        error: Error message if the signal could not be sent.
        dry_run: Whether this was a dry-run (no signal sent).
    """

    record: BlockerRecord
    outcome: TerminationOutcome
    error: str | None = None
    dry_run: bool = False

    @property
    def closed(self) -> bool:
        """Check if the process is no longer running."""
        return self.outcome in (TerminationOutcome.GRACEFUL, TerminationOutcome.FORCED)

    @property
    def failed(self) -> bool:
        """Check if the process could not be closed."""
        return self.outcome in (TerminationOutcome.STILL_RUNNING, TerminationOutcome.SIGNAL_FAILED)


class EjectTier(Enum):
    """Unmount escalation tier."""

    NORMAL = "normal"
    FORCE = "force"


@dataclass(frozen=True, slots=True)
class EjectAttempt:
    """One unmount invocation.

    Attributes:
        tier: Which escalation tier was tried.
        success: Whether the unmount succeeded.
        error: Error output if it failed.
    """

    tier: EjectTier
    success: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class EjectResult:
    """Result of ejecting a volume.

    Attributes:
        volume: Volume name under the mount root.
        attempts: Unmount attempts in the order they ran.
        dry_run: Whether this was a dry-run (nothing unmounted).
    """

    volume: str
    attempts: tuple[EjectAttempt, ...] = field(default_factory=tuple)
    dry_run: bool = False

    @property
    def success(self) -> bool:
        """Check if any tier unmounted the volume."""
        return any(a.success for a in self.attempts)

    @property
    def tier(self) -> EjectTier | None:
        """Return the tier that succeeded, or None if all failed."""
        for attempt in self.attempts:
            if attempt.success:
                return attempt.tier
        return None

    @property
    def forced(self) -> bool:
        """Check if only the forced unmount succeeded."""
        return self.tier == EjectTier.FORCE

"""Blocker models for busy-volume analysis.

This module defines the data structures describing processes that hold
open file handles on a volume, and the aggregate view of one scan.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


class AccessMode(Enum):
    """How a blocking process uses its file descriptor."""

    READ = "read"
    WRITE = "write"


class ProcessOrigin(Enum):
    """Who controls a blocking process.

    Attributes:
        SYSTEM: macOS background service that releases on unmount.
        USER: Application the user can close.
    """

    SYSTEM = "system"
    USER = "user"


@dataclass(frozen=True, slots=True)
class BlockerRecord:
    """A single process holding an open handle on the target volume.

    Attributes:
        name: Process name as reported by lsof (e.g., 'Preview').
        pid: Process identifier, unique within one scan.
        access: Access mode implied by the first descriptor seen.
        origin: Whether the process is a system service or a user app.
    """

    name: str
    pid: int
    access: AccessMode
    origin: ProcessOrigin

    def __post_init__(self) -> None:
        """Validate blocker data after initialization."""
        if not self.name:
            msg = "Process name cannot be empty"
            raise ValueError(msg)
        if self.pid <= 0:
            msg = f"PID must be positive, got {self.pid}"
            raise ValueError(msg)

    @property
    def is_writer(self) -> bool:
        """Check if the process holds a write handle."""
        return self.access == AccessMode.WRITE

    @property
    def is_system(self) -> bool:
        """Check if the process is a known system service."""
        return self.origin == ProcessOrigin.SYSTEM

    @property
    def is_user(self) -> bool:
        """Check if the process is a user application."""
        return self.origin == ProcessOrigin.USER


@dataclass(frozen=True, slots=True)
class BlockerSummary:
    """Aggregate view of all blockers found in one scan.

    Built once by the classifier and passed to the reporter and the
    decision logic; never updated afterwards.

    Attributes:
        records: Deduplicated blocker records in scan order.
        user_count: Number of USER-origin records.
        system_count: Number of SYSTEM-origin records.
        has_writers: True if any record holds a write handle.
    """

    records: tuple[BlockerRecord, ...]
    user_count: int
    system_count: int
    has_writers: bool

    @classmethod
    def from_records(cls, records: Sequence[BlockerRecord]) -> "BlockerSummary":
        """Create a summary from classified records.

        Args:
            records: Blocker records from a single scan.

        Returns:
            BlockerSummary with counts derived from the records.
        """
        user_count = sum(1 for r in records if r.is_user)
        return cls(
            records=tuple(records),
            user_count=user_count,
            system_count=len(records) - user_count,
            has_writers=any(r.is_writer for r in records),
        )

    @property
    def total(self) -> int:
        """Return the number of distinct blocking processes."""
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        """Check if nothing is blocking the volume."""
        return not self.records

    @property
    def user_records(self) -> tuple[BlockerRecord, ...]:
        """Return only the records the user can close."""
        return tuple(r for r in self.records if r.is_user)

    @property
    def needs_confirmation(self) -> bool:
        """Check if closing apps requires asking the user first.

        System-only blockers release on unmount, so only user apps
        warrant a prompt.
        """
        return self.user_count > 0

    @property
    def default_confirm(self) -> bool:
        """Return the default answer for the close-and-eject prompt."""
        return not self.has_writers

"""Data models for diskfree.

This module exports the core data structures used throughout the application.
"""

from diskfree.models.blocker import AccessMode, BlockerRecord, BlockerSummary, ProcessOrigin
from diskfree.models.result import (
    EjectAttempt,
    EjectResult,
    EjectTier,
    TerminationOutcome,
    TerminationResult,
)

__all__ = [
    "AccessMode",
    "BlockerRecord",
    "BlockerSummary",
    "EjectAttempt",
    "EjectResult",
    "EjectTier",
    "ProcessOrigin",
    "TerminationOutcome",
    "TerminationResult",
]

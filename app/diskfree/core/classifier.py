"""Classification of raw lsof output into blocker records.

lsof prints one line per (process, descriptor) pair:

    COMMAND     PID  USER   FD   TYPE DEVICE SIZE/OFF NODE NAME
    Preview    4211 alice  12r   REG   1,18   482133   91 /Volumes/SD/a.jpg

Only the command, the PID and the FD column are used. The FD column ends
in the access flag: r (read), w (write) or u (read and write).
"""

import logging

from diskfree.core.reserved import is_system_process
from diskfree.models.blocker import AccessMode, BlockerRecord, BlockerSummary, ProcessOrigin

logger = logging.getLogger(__name__)

# Characters in the lsof FD column that indicate a write handle
_WRITE_FLAGS = frozenset("uw")


def classify_access(flags: str) -> AccessMode:
    """Determine the access mode from an lsof FD token.

    Args:
        flags: FD column value (e.g., '12r', '3u', 'cwd').

    Returns:
        AccessMode.WRITE if the token contains 'u' or 'w', READ otherwise.
    """
    if _WRITE_FLAGS.intersection(flags):
        return AccessMode.WRITE
    return AccessMode.READ


def classify_origin(name: str) -> ProcessOrigin:
    """Determine whether a process is a system service or a user app."""
    return ProcessOrigin.SYSTEM if is_system_process(name) else ProcessOrigin.USER


def parse_line(line: str) -> BlockerRecord | None:
    """Parse a single line of lsof output.

    Args:
        line: Whitespace-separated lsof line without the header.

    Returns:
        BlockerRecord if parsing succeeds, None otherwise.
    """
    parts = line.split()
    if len(parts) < 4:
        logger.debug("Skipping malformed lsof line (parts=%d): %r", len(parts), line[:100])
        return None

    name, pid_str, flags = parts[0], parts[1], parts[3]
    if not (pid_str.isascii() and pid_str.isdigit()) or int(pid_str) <= 0:
        logger.debug("Skipping lsof line with invalid PID %r", pid_str)
        return None

    return BlockerRecord(
        name=name,
        pid=int(pid_str),
        access=classify_access(flags),
        origin=classify_origin(name),
    )


def classify_blockers(raw: str) -> list[BlockerRecord]:
    """Turn raw lsof output into one record per distinct PID.

    A process with several descriptors on the volume appears on several
    lines; the first line seen for a PID determines its access mode and
    later lines are ignored.

    Args:
        raw: lsof output with the header line already removed.

    Returns:
        Deduplicated records in order of first appearance.
    """
    records: list[BlockerRecord] = []
    seen: set[int] = set()

    for line in raw.splitlines():
        if not line.strip():
            continue

        record = parse_line(line)
        if record is None or record.pid in seen:
            continue

        seen.add(record.pid)
        records.append(record)

    return records


def summarize(raw: str) -> BlockerSummary:
    """Classify raw lsof output and aggregate it in one step."""
    return BlockerSummary.from_records(classify_blockers(raw))

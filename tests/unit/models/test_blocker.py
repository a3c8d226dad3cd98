"""Unit tests for blocker models."""

import pytest
from diskfree.models.blocker import AccessMode, BlockerRecord, BlockerSummary, ProcessOrigin


def _record(
    name: str = "Preview",
    pid: int = 100,
    access: AccessMode = AccessMode.READ,
    origin: ProcessOrigin = ProcessOrigin.USER,
) -> BlockerRecord:
    """Create a test BlockerRecord."""
    return BlockerRecord(name=name, pid=pid, access=access, origin=origin)


class TestBlockerRecord:
    """Tests for BlockerRecord dataclass."""

    def test_properties(self) -> None:
        """Convenience properties reflect access and origin."""
        record = _record(access=AccessMode.WRITE, origin=ProcessOrigin.SYSTEM)

        assert record.is_writer is True
        assert record.is_system is True
        assert record.is_user is False

    def test_empty_name_rejected(self) -> None:
        """Empty process names are invalid."""
        with pytest.raises(ValueError, match="name cannot be empty"):
            _record(name="")

    @pytest.mark.parametrize("pid", [0, -1])
    def test_non_positive_pid_rejected(self, pid: int) -> None:
        """PIDs must be positive."""
        with pytest.raises(ValueError, match="PID must be positive"):
            _record(pid=pid)

    def test_is_immutable(self) -> None:
        """Records cannot be modified after creation."""
        record = _record()
        with pytest.raises(AttributeError):
            record.pid = 5  # type: ignore[misc]


class TestBlockerSummary:
    """Tests for BlockerSummary.from_records."""

    def test_counts_and_writers(self) -> None:
        """Counts split by origin; has_writers reflects any writer."""
        summary = BlockerSummary.from_records(
            [
                _record(pid=1),
                _record(name="mds", pid=2, origin=ProcessOrigin.SYSTEM, access=AccessMode.WRITE),
                _record(pid=3),
            ]
        )

        assert summary.user_count == 2
        assert summary.system_count == 1
        assert summary.total == 3
        assert summary.has_writers is True
        assert [r.pid for r in summary.user_records] == [1, 3]

    def test_empty(self) -> None:
        """An empty record set needs no confirmation."""
        summary = BlockerSummary.from_records([])

        assert summary.is_empty is True
        assert summary.needs_confirmation is False
        assert summary.has_writers is False

    def test_system_only_needs_no_confirmation(self) -> None:
        """System-only blockers go straight to eject."""
        summary = BlockerSummary.from_records(
            [_record(name="mds", origin=ProcessOrigin.SYSTEM, access=AccessMode.WRITE)]
        )

        assert summary.needs_confirmation is False

    def test_default_confirm_no_when_writing(self) -> None:
        """Writers flip the default answer to no."""
        writing = BlockerSummary.from_records([_record(access=AccessMode.WRITE)])
        reading = BlockerSummary.from_records([_record()])

        assert writing.default_confirm is False
        assert reading.default_confirm is True

    def test_records_are_a_tuple(self) -> None:
        """Summary holds an immutable copy of the records."""
        records = [_record()]
        summary = BlockerSummary.from_records(records)
        records.append(_record(pid=2))

        assert summary.total == 1

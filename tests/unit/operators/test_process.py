"""Unit tests for ProcessTerminator.

os.kill is patched everywhere so no real process is ever signalled,
and sleeping is replaced by a recorder.
"""

import signal
from unittest.mock import MagicMock, patch

import pytest
from diskfree.models.blocker import AccessMode, BlockerRecord, ProcessOrigin
from diskfree.models.result import TerminationOutcome
from diskfree.operators.process import ProcessTerminator, closed_count, is_alive


def _record(name: str = "Preview", pid: int = 4211, system: bool = False) -> BlockerRecord:
    """Create a test BlockerRecord."""
    return BlockerRecord(
        name=name,
        pid=pid,
        access=AccessMode.READ,
        origin=ProcessOrigin.SYSTEM if system else ProcessOrigin.USER,
    )


class FakeProcess:
    """Simulates a process that dies after a number of liveness probes."""

    def __init__(self, probes_until_exit: int | None, ignores_term: bool = False) -> None:
        self.probes_until_exit = probes_until_exit
        self.ignores_term = ignores_term
        self.signals: list[int] = []
        self.probes = 0
        self.killed = False

    def kill(self, pid: int, sig: int) -> None:
        if sig == 0:
            self.probes += 1
            if self.killed or (
                self.probes_until_exit is not None and self.probes > self.probes_until_exit
            ):
                raise ProcessLookupError
            return
        self.signals.append(sig)


@pytest.fixture
def sleeps() -> list[float]:
    """Records every sleep the terminator performs."""
    return []


@pytest.fixture
def terminator(sleeps: list[float]) -> ProcessTerminator:
    """Create ProcessTerminator with a recording sleep."""
    return ProcessTerminator(sleep=sleeps.append)


class TestIsAlive:
    """Tests for is_alive."""

    def test_alive(self) -> None:
        """A signal-0 probe that succeeds means alive."""
        with patch("diskfree.operators.process.os.kill"):
            assert is_alive(1) is True

    def test_dead(self) -> None:
        """ProcessLookupError means dead."""
        with patch("diskfree.operators.process.os.kill", side_effect=ProcessLookupError):
            assert is_alive(1) is False

    def test_other_owner_is_alive(self) -> None:
        """PermissionError means the process exists but is not ours."""
        with patch("diskfree.operators.process.os.kill", side_effect=PermissionError):
            assert is_alive(1) is True


class TestTerminate:
    """Tests for ProcessTerminator.terminate."""

    def test_graceful_exit(self, terminator: ProcessTerminator, sleeps: list[float]) -> None:
        """A process that exits after SIGTERM is never sent SIGKILL."""
        proc = FakeProcess(probes_until_exit=2)
        with patch("diskfree.operators.process.os.kill", side_effect=proc.kill):
            result = terminator.terminate(_record())

        assert result.outcome == TerminationOutcome.GRACEFUL
        assert proc.signals == [signal.SIGTERM]
        assert sleeps == [1.0, 1.0]

    def test_forced_exit(self, terminator: ProcessTerminator, sleeps: list[float]) -> None:
        """An unresponsive process is killed after five polls and a settle."""
        proc = FakeProcess(probes_until_exit=None)

        def kill(pid: int, sig: int) -> None:
            proc.kill(pid, sig)
            if sig == signal.SIGKILL:
                proc.killed = True

        with patch("diskfree.operators.process.os.kill", side_effect=kill):
            result = terminator.terminate(_record())

        assert result.outcome == TerminationOutcome.FORCED
        assert proc.signals == [signal.SIGTERM, signal.SIGKILL]
        assert sleeps == [1.0] * 5 + [1.0]

    def test_survives_sigkill(self, terminator: ProcessTerminator) -> None:
        """A process still alive after the settle period is reported."""
        proc = FakeProcess(probes_until_exit=None)
        with patch("diskfree.operators.process.os.kill", side_effect=proc.kill):
            result = terminator.terminate(_record())

        assert result.outcome == TerminationOutcome.STILL_RUNNING
        assert result.failed is True

    def test_signal_denied(self, terminator: ProcessTerminator, sleeps: list[float]) -> None:
        """Permission errors on SIGTERM are reported without waiting."""
        error = PermissionError(1, "Operation not permitted")
        with patch("diskfree.operators.process.os.kill", side_effect=error):
            result = terminator.terminate(_record())

        assert result.outcome == TerminationOutcome.SIGNAL_FAILED
        assert result.error == "Operation not permitted"
        assert sleeps == []

    def test_already_gone(self, terminator: ProcessTerminator) -> None:
        """A process that vanished before SIGTERM counts as closed."""
        with patch("diskfree.operators.process.os.kill", side_effect=ProcessLookupError):
            result = terminator.terminate(_record())

        assert result.outcome == TerminationOutcome.GRACEFUL

    def test_dry_run_sends_nothing(self) -> None:
        """Dry-run never calls os.kill."""
        with patch("diskfree.operators.process.os.kill") as mock_kill:
            result = ProcessTerminator(dry_run=True).terminate(_record())

        mock_kill.assert_not_called()
        assert result.dry_run is True
        assert result.closed is True


class TestTerminateAll:
    """Tests for ProcessTerminator.terminate_all."""

    def test_skips_system_processes(self, terminator: ProcessTerminator) -> None:
        """System processes are never signalled."""
        records = [_record(name="mds_stores", pid=310, system=True), _record()]
        proc = FakeProcess(probes_until_exit=0)

        with patch("diskfree.operators.process.os.kill", side_effect=proc.kill) as mock_kill:
            results = terminator.terminate_all(records)

        assert [r.outcome for r in results] == [
            TerminationOutcome.SKIPPED,
            TerminationOutcome.GRACEFUL,
        ]
        signalled_pids = {c.args[0] for c in mock_kill.call_args_list if c.args[1] != 0}
        assert signalled_pids == {4211}

    def test_failure_does_not_stop_others(self, terminator: ProcessTerminator) -> None:
        """A denied signal on one process does not abort the rest."""
        records = [_record(name="root-app", pid=1), _record(pid=2)]

        def kill(pid: int, sig: int) -> None:
            if pid == 1:
                raise PermissionError(1, "Operation not permitted")
            if sig == 0:
                raise ProcessLookupError

        with patch("diskfree.operators.process.os.kill", side_effect=kill):
            results = terminator.terminate_all(records)

        assert [r.outcome for r in results] == [
            TerminationOutcome.SIGNAL_FAILED,
            TerminationOutcome.GRACEFUL,
        ]
        assert closed_count(results) == 1

    def test_callbacks(self, terminator: ProcessTerminator) -> None:
        """on_start and on_done fire for user processes only."""
        records = [_record(name="mds", pid=301, system=True), _record()]
        on_start = MagicMock()
        on_done = MagicMock()

        with patch("diskfree.operators.process.os.kill", side_effect=ProcessLookupError):
            terminator.terminate_all(records, on_start=on_start, on_done=on_done)

        on_start.assert_called_once_with(records[1])
        assert on_done.call_args.args[0].record == records[1]

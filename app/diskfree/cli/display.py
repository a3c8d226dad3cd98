"""Rich display functions for volumes, blockers and results.

Pure presentation: nothing here changes state or waits for input.
"""

from rich.markup import escape
from rich.panel import Panel

from diskfree.models.blocker import BlockerRecord, BlockerSummary
from diskfree.models.result import EjectResult, EjectTier, TerminationOutcome, TerminationResult
from diskfree.utils.formatting import (
    console,
    print_error,
    print_info,
    print_step,
    print_success,
    print_warning,
)


def print_header() -> None:
    """Print the application banner."""
    console.print()
    console.print(
        Panel.fit(
            "[header]DiskFree[/]  [muted]eject stubborn disks[/]",
            border_style="border",
        )
    )
    console.print()


def print_volume_menu(volumes: list[str]) -> None:
    """Print a numbered list of volumes for selection."""
    console.print(f"[bold]Found {len(volumes)} volume(s):[/]\n")
    for index, name in enumerate(volumes, start=1):
        console.print(f"  [success]{index}[/]) {escape(name)}")
    console.print()


def print_available_volumes(volumes: list[str]) -> None:
    """Print the volumes that can be ejected, as a bullet list."""
    console.print("\nAvailable volumes:")
    if not volumes:
        console.print("  [muted](none)[/]")
    for name in volumes:
        console.print(f"  • {escape(name)}")


def format_blocker_line(record: BlockerRecord) -> str:
    """Format a blocker as a single line with Rich markup.

    Args:
        record: Blocker to format.

    Returns:
        Markup string with name, PID, access mode and origin.
    """
    if record.is_writer:
        bullet = "[writing]●[/]"
        access = "[writing]WRITING[/]"
    else:
        bullet = "[reading]●[/]"
        access = "[reading]reading[/]"

    origin = "[system_process]system[/]" if record.is_system else "[user_process]user app[/]"

    return (
        f"  {bullet} [blocker]{escape(record.name)}[/] (PID {record.pid})"
        f" · {access} · {origin}"
    )


def print_blockers(summary: BlockerSummary) -> None:
    """Print every blocker, the counts and any write hazard.

    Args:
        summary: Classified blockers of the target volume.
    """
    console.print("\n[bold]Blocking processes:[/]\n")
    for record in summary.records:
        console.print(format_blocker_line(record))

    console.print()
    print_info(f"{summary.user_count} user app(s), {summary.system_count} system process(es)")

    if summary.system_count:
        console.print(
            "  [muted]System processes (Spotlight, iCloud, etc.) release automatically on unmount[/]"
        )

    if summary.has_writers:
        console.print()
        print_warning("[error]WARNING: One or more processes are actively WRITING to this disk![/]")
        print_warning("Ejecting now could cause data corruption or file loss.")


def print_write_hazard() -> None:
    """Print the banner shown before confirming with active writers."""
    console.print("\n[error]⚠  ACTIVE WRITES DETECTED[/]")
    console.print("[error]Closing writing processes may cause data loss.[/]")


def print_closing(record: BlockerRecord) -> None:
    """Announce that a process is about to be closed."""
    print_step(f"Closing [blocker]{escape(record.name)}[/] (PID {record.pid})...")


def print_termination_result(result: TerminationResult) -> None:
    """Print the outcome of closing one process."""
    name = escape(result.record.name)
    pid = result.record.pid

    match result.outcome:
        case TerminationOutcome.GRACEFUL:
            suffix = " [muted](dry run)[/]" if result.dry_run else ""
            print_info(f"{name} closed{suffix}")
        case TerminationOutcome.FORCED:
            print_warning(f"{name} didn't close gracefully, sent SIGKILL")
            print_info(f"{name} closed")
        case TerminationOutcome.STILL_RUNNING:
            print_error(f"Could not close {name} (PID {pid})")
        case TerminationOutcome.SIGNAL_FAILED:
            reason = escape(result.error or "permission denied?")
            print_error(f"Could not signal {name} (PID {pid}): {reason}")
        case TerminationOutcome.SKIPPED:
            pass


def print_termination_summary(results: list[TerminationResult]) -> None:
    """Print how many user processes were closed."""
    attempted = [r for r in results if r.outcome != TerminationOutcome.SKIPPED]
    closed = sum(1 for r in attempted if r.closed)
    if closed == len(attempted):
        console.print(f"[muted]Closed {closed} user app(s)[/]")
    else:
        console.print(f"[muted]Closed {closed} of {len(attempted)} user app(s)[/]")


def print_eject_result(result: EjectResult) -> None:
    """Print the outcome of ejecting a volume.

    Reports each failed tier and either success or a remediation hint.

    Args:
        result: Result returned by the ejector.
    """
    name = escape(result.volume)

    for attempt in result.attempts:
        if not attempt.success and attempt.tier == EjectTier.NORMAL:
            print_warning("Normal eject failed. Trying force unmount...")

    console.print()
    if not result.success:
        print_error(f"Could not eject {name}. Try closing all apps manually or restart Finder.")
        return

    if result.dry_run:
        print_success(f"{name} would be ejected (dry run).")
    elif result.forced:
        print_success(f"✓ {name} force-ejected successfully!")
    else:
        print_success(f"✓ {name} ejected successfully!")
    console.print("  [muted]Safe to remove the disk.[/]")

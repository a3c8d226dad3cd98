"""Eject workflow: target resolution, blocker decision and ejection.

The controller sequences the scanners and operators for one run and
turns every terminal outcome into an exit code. Interactive input goes
through Typer prompts; everything else is printed via cli.display.
"""

import logging
import time

import typer
from rich.markup import escape

from diskfree.cli.display import (
    print_available_volumes,
    print_blockers,
    print_closing,
    print_eject_result,
    print_termination_result,
    print_termination_summary,
    print_volume_menu,
    print_write_hazard,
)
from diskfree.core.classifier import summarize
from diskfree.core.reserved import is_reserved_volume
from diskfree.models.blocker import BlockerSummary
from diskfree.operators.eject import DiskEjector
from diskfree.operators.process import ProcessTerminator, closed_count
from diskfree.scanners.lsof import LsofScanner
from diskfree.scanners.volumes import VolumeScanner
from diskfree.utils.formatting import console, print_error, print_info, print_step, print_warning

logger = logging.getLogger(__name__)

# Pause between closing apps and unmounting so handles are released
SETTLE_SECONDS = 1.0


def resolve_target(volume: str | None, scanner: VolumeScanner) -> str:
    """Determine which volume to eject.

    Args:
        volume: Volume name from the command line, or None to prompt.
        scanner: Scanner for the mount root.

    Returns:
        Name of an existing volume.

    Raises:
        typer.Exit: code 1 for a system volume, an unknown name or an
            invalid selection; code 0 when there is nothing to eject.
    """
    if volume is not None:
        if is_reserved_volume(volume):
            print_error(f"'{escape(volume)}' is a system volume and cannot be ejected")
            raise typer.Exit(code=1)
        if not scanner.exists(volume):
            print_error(f"Volume '{escape(volume)}' not found in {scanner.mount_root}")
            print_available_volumes(scanner.scan())
            raise typer.Exit(code=1)
        return volume

    print_step("Scanning for external volumes...")
    console.print()

    volumes = scanner.scan()
    if not volumes:
        print_warning("No external volumes found.")
        raise typer.Exit(code=0)

    print_volume_menu(volumes)
    choice: str = typer.prompt(
        f"Select volume to eject [1-{len(volumes)}]",
        default="",
        show_default=False,
    )

    choice = choice.strip()
    if not (choice.isascii() and choice.isdigit()) or not 1 <= int(choice) <= len(volumes):
        print_error("Invalid selection.")
        raise typer.Exit(code=1)

    return volumes[int(choice) - 1]


def confirm_close(summary: BlockerSummary, assume_yes: bool = False) -> bool:
    """Ask whether to close the blocking user apps.

    The default answer is "no" when any blocker is writing and "yes"
    otherwise.

    Args:
        summary: Classified blockers.
        assume_yes: Skip the prompt and answer yes.

    Returns:
        True if the user agreed to close apps and eject.
    """
    if summary.has_writers:
        print_write_hazard()
        prompt = "Continue anyway?"
    else:
        prompt = "Close blocking apps and eject?"

    if assume_yes:
        logger.debug("Confirmation skipped (--yes)")
        return True

    return typer.confirm(prompt, default=summary.default_confirm)


def eject_volume(volume: str, ejector: DiskEjector) -> int:
    """Eject a volume and report the outcome.

    Returns:
        Exit code: 0 on success, 1 if both unmount tiers failed.
    """
    print_step(f"Attempting to eject [volume]{escape(volume)}[/]...")
    result = ejector.eject(volume)
    print_eject_result(result)
    return 0 if result.success else 1


def run(
    volume: str,
    *,
    volumes: VolumeScanner,
    lsof: LsofScanner,
    terminator: ProcessTerminator,
    ejector: DiskEjector,
    assume_yes: bool = False,
) -> int:
    """Free and eject a resolved volume.

    Args:
        volume: Name of an existing volume.
        volumes: Scanner used to locate the volume's mount path.
        lsof: Scanner for open handles.
        terminator: Closes user processes.
        ejector: Unmounts the volume.
        assume_yes: Answer the confirmation prompt with yes.

    Returns:
        Exit code for the run.
    """
    console.print()
    print_step(f"Checking what's using [volume]{escape(volume)}[/]...")

    summary = summarize(lsof.scan(volumes.path_for(volume)))
    logger.debug(
        "Blockers on %s: %d user, %d system, writers=%s",
        volume,
        summary.user_count,
        summary.system_count,
        summary.has_writers,
    )

    if summary.is_empty:
        print_info("No blocking processes found.")
        console.print()
        return eject_volume(volume, ejector)

    print_blockers(summary)
    console.print()

    if not summary.needs_confirmation:
        print_info("Only system processes are blocking, these release on unmount.")
        console.print()
        return eject_volume(volume, ejector)

    if not confirm_close(summary, assume_yes):
        console.print()
        if summary.has_writers:
            print_warning("Aborted. Wait for writes to complete, then try again.")
        else:
            print_warning("Aborted.")
        return 0

    console.print()
    results = terminator.terminate_all(
        summary.records,
        on_start=print_closing,
        on_done=print_termination_result,
    )
    print_termination_summary(results)
    logger.debug("Closed %d of %d user process(es)", closed_count(results), summary.user_count)

    if not terminator.dry_run:
        time.sleep(SETTLE_SECONDS)

    return eject_volume(volume, ejector)

"""Main CLI application entry point.

Defines the Typer application and its options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from diskfree import __version__
from diskfree.cli import controller
from diskfree.cli.display import print_available_volumes, print_header
from diskfree.core.paths import MOUNT_ROOT
from diskfree.operators.eject import DiskEjector
from diskfree.operators.process import ProcessTerminator
from diskfree.scanners.lsof import LsofScanner
from diskfree.scanners.volumes import VolumeScanner
from diskfree.utils.formatting import err_console

app = typer.Typer(
    name="diskfree",
    help="Eject stubborn macOS disks without logging out.",
    rich_markup_mode="rich",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"diskfree version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route diagnostics to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@app.command()
def main(
    volume: Annotated[
        str | None,
        typer.Argument(
            help="Name of the volume under /Volumes. Prompts for a choice if omitted.",
            show_default=False,
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Close blocking apps without asking."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be closed and ejected."),
    ] = False,
    list_only: Annotated[
        bool,
        typer.Option("--list", "-l", help="List ejectable volumes and exit."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Find what keeps a disk busy, close it, and eject the disk."""
    configure_logging(verbose)

    volumes = VolumeScanner(MOUNT_ROOT)

    if list_only:
        print_available_volumes(volumes.scan())
        return

    print_header()
    target = controller.resolve_target(volume, volumes)

    code = controller.run(
        target,
        volumes=volumes,
        lsof=LsofScanner(),
        terminator=ProcessTerminator(dry_run=dry_run),
        ejector=DiskEjector(MOUNT_ROOT, dry_run=dry_run),
        assume_yes=yes,
    )
    if code:
        raise typer.Exit(code=code)


if __name__ == "__main__":
    app()

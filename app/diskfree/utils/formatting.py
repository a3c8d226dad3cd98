"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console

from diskfree.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[success]✓[/] {message}")


def print_step(message: str) -> None:
    """Print a progress step."""
    console.print(f"[info]→[/] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]⚠[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]✗[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")

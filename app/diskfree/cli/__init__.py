"""CLI package for diskfree.

This package contains the Typer application and the eject workflow.
"""

from diskfree.cli.main import app

__all__ = ["app"]

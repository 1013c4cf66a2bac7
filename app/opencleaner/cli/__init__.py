"""CLI package for opencleaner.

This package contains the Typer application and all subcommands.
"""

from opencleaner.cli.main import app

__all__ = ["app"]

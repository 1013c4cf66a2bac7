"""CLI commands for opencleaner.

This package contains all subcommand implementations.
"""

from opencleaner.cli.commands import cleanup, doctor, survey, whitelist

__all__ = ["cleanup", "doctor", "survey", "whitelist"]

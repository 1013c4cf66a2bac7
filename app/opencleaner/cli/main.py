"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from opencleaner import __version__
from opencleaner.cli.commands import cleanup, doctor, survey, whitelist

# Create main Typer app
app = typer.Typer(
    name="opencleaner",
    help="Find and safely remove reclaimable files on macOS.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"opencleaner version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr, at DEBUG when verbose and WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
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
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """opencleaner - Find and safely remove reclaimable files on macOS.

    Caches, logs, leftover app data, orphaned preferences, the Trash and
    large files are classified by risk before anything is removed.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.add_typer(survey.app, name="survey")
app.add_typer(cleanup.app, name="cleanup")
app.add_typer(doctor.app, name="doctor")
app.add_typer(whitelist.app, name="whitelist")

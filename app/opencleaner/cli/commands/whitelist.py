"""Whitelist management commands.

Paths containing any whitelist entry are never moved to the Trash or
deleted. Built-in entries protect security software and credential
stores; custom entries are persisted in the config file.
"""

from typing import Annotated

import typer
from rich.table import Table

from opencleaner.core.config import ConfigError, require_config, save_config
from opencleaner.core.safety import DEFAULT_WHITELIST
from opencleaner.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage paths protected from deletion.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command("list")
def list_entries() -> None:
    """Show built-in and custom whitelist entries."""
    config = require_config()

    table = Table(
        title="Whitelist",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Entry", no_wrap=True)
    table.add_column("Source", style="muted")

    for entry in sorted(DEFAULT_WHITELIST):
        table.add_row(entry, "built-in")
    for entry in config.whitelist:
        table.add_row(f"[info]{entry}[/info]", "custom")

    console.print(table)


@app.command()
def add(
    entry: Annotated[
        str,
        typer.Argument(help="Path substring to protect (e.g. 'com.example.App')."),
    ],
) -> None:
    """Protect every path containing ENTRY."""
    if not entry.strip():
        print_error("Whitelist entry cannot be empty.")
        raise typer.Exit(code=1)

    config = require_config()
    if entry in DEFAULT_WHITELIST or entry in config.whitelist:
        print_info(f"'{entry}' is already whitelisted.")
        return

    updated = config.model_copy(update={"whitelist": [*config.whitelist, entry]})
    try:
        path = save_config(updated)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Added '{entry}' to the whitelist ({path}).")


@app.command()
def remove(
    entry: Annotated[
        str,
        typer.Argument(help="Custom whitelist entry to remove."),
    ],
) -> None:
    """Remove a custom whitelist entry."""
    config = require_config()

    if entry not in config.whitelist:
        if entry in DEFAULT_WHITELIST:
            print_error(f"'{entry}' is a built-in entry and cannot be removed.")
        else:
            print_error(f"'{entry}' is not in the whitelist.")
        raise typer.Exit(code=1)

    remaining = [e for e in config.whitelist if e != entry]
    updated = config.model_copy(update={"whitelist": remaining})
    try:
        save_config(updated)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Removed '{entry}' from the whitelist.")

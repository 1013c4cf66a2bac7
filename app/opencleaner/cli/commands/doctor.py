"""Doctor command implementation.

Shows disk usage and a quick summary of reclaimable space.
"""

import shutil
from typing import Annotated

import typer
from rich.table import Table

from opencleaner.cli.display import print_risk_breakdown
from opencleaner.cli.types import create_engine, quick_categories
from opencleaner.core.config import require_config
from opencleaner.core.engine import ScanError
from opencleaner.core.safety import DEFAULT_WHITELIST, SNAPSHOT_COMMAND
from opencleaner.models.item import CleanupCategory, Language
from opencleaner.models.scan_result import ScanResult
from opencleaner.utils.fs import format_size
from opencleaner.utils.formatting import console, print_error, print_success, print_warning
from opencleaner.utils.shell import command_exists

app = typer.Typer(
    help="Check disk usage and reclaimable space.",
    invoke_without_command=True,
)

# Free space below this share of the disk triggers a warning
LOW_SPACE_RATIO = 0.1


def _print_disk_usage(path: str) -> None:
    usage = shutil.disk_usage(path)
    used_ratio = usage.used / usage.total if usage.total else 0.0

    console.print(f"[header]Disk ({path})[/]")
    console.print(f"  Total: [info]{format_size(usage.total)}[/]")
    console.print(f"  Used:  [info]{format_size(usage.used)}[/] ({used_ratio:.0%})")
    console.print(f"  Free:  [info]{format_size(usage.free)}[/]")

    if usage.total and usage.free / usage.total < LOW_SPACE_RATIO:
        print_warning("Less than 10% of the disk is free.")


def _create_category_table(result: ScanResult, language: Language) -> Table:
    table = Table(
        title="Reclaimable Space",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category")
    table.add_column("Items", justify="right")
    table.add_column("Size", style="info", justify="right")

    grouped = result.items_by_category
    for category in CleanupCategory:
        items = grouped.get(category)
        if not items:
            continue
        table.add_row(
            category.display_name(language),
            str(len(items)),
            format_size(sum(item.size for item in items)),
        )
    return table


@app.callback(invoke_without_command=True)
def doctor(
    ctx: typer.Context,
    lang: Annotated[
        Language | None,
        typer.Option(
            "--lang",
            "-l",
            help="Language for category names (defaults to config).",
            case_sensitive=False,
        ),
    ] = None,
) -> None:
    """Show disk usage and a quick estimate of reclaimable space.

    The quick scan skips the large file search.
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config()
    language = lang or config.language

    try:
        _print_disk_usage("/")
    except OSError as e:
        print_error(f"Cannot read disk usage: {e}")
        raise typer.Exit(code=1) from e

    snapshots = "available" if command_exists(SNAPSHOT_COMMAND[0]) else "unavailable"
    console.print(f"  Local snapshots: [muted]{snapshots}[/]")
    console.print(
        f"  Whitelist: [muted]{len(DEFAULT_WHITELIST)} built-in, "
        f"{len(config.whitelist)} custom[/]"
    )

    engine = create_engine()
    try:
        result = engine.scan(quick_categories())
    except (ScanError, OSError) as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(code=1) from e

    console.print()
    if not result.items:
        print_success("Nothing to clean up.")
        return

    console.print(_create_category_table(result, language))
    print_risk_breakdown(result.items, language)
    console.print(
        f"\nCleanable: [info]{result.total_size_human}[/], "
        f"safe to delete: [risk_safe]{format_size(result.safe_total_size)}[/]"
    )

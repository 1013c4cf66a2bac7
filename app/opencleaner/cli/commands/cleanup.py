"""Cleanup command implementation.

Scans the system, selects items by risk level and removes them through
the safety manager. Regular items are moved to the Trash; items already
in the Trash are deleted permanently.
"""

from typing import Annotated

import typer

from opencleaner.cli.display import (
    create_candidates_table,
    create_results_table,
    print_results_summary,
    print_risk_breakdown,
)
from opencleaner.cli.types import create_engine, create_safety_manager
from opencleaner.core.config import require_config
from opencleaner.core.engine import ScanError
from opencleaner.core.safety import SafetyManager, SnapshotError
from opencleaner.models.item import CleanupCategory, CleanupItem, Language, RiskLevel
from opencleaner.utils.fs import format_size
from opencleaner.utils.formatting import console, print_error, print_info, print_warning

app = typer.Typer(
    help="Remove reclaimable files.",
    invoke_without_command=True,
)


def select_items(items: list[CleanupItem], include_caution: bool) -> list[CleanupItem]:
    """Pick the items eligible for cleanup.

    Safe items are always selected, caution items only on request, and
    risky items never.

    Args:
        items: Scanned items.
        include_caution: Whether to include CAUTION items.

    Returns:
        Selected items in their original order.
    """
    allowed = {RiskLevel.SAFE}
    if include_caution:
        allowed.add(RiskLevel.CAUTION)
    return [item for item in items if item.risk_level in allowed]


def _confirm_cleanup(items: list[CleanupItem]) -> bool:
    """Prompt user to confirm the cleanup.

    Args:
        items: Items about to be removed.

    Returns:
        True if user confirms, False otherwise.
    """
    size = format_size(sum(item.size for item in items))
    trash_count = sum(1 for item in items if item.category == CleanupCategory.TRASH)
    message = f"Clean up {len(items)} item(s) ({size})?"
    if trash_count:
        message = (
            f"Clean up {len(items)} item(s) ({size})? "
            f"{trash_count} item(s) already in the Trash will be deleted permanently."
        )
    return typer.confirm(message, default=False)


def _take_snapshot(manager: SafetyManager, yes: bool) -> None:
    """Create a snapshot, asking whether to continue if that fails.

    Raises:
        typer.Exit: If the snapshot failed and the user declined to continue.
    """
    print_info("Creating local snapshot...")
    try:
        manager.create_snapshot()
    except SnapshotError as e:
        print_warning(str(e))
        if not yes and not typer.confirm("Continue without a snapshot?", default=False):
            print_info("Aborted.")
            raise typer.Exit(code=1) from e
        return
    print_info("Snapshot created.")


@app.callback(invoke_without_command=True)
def cleanup(
    ctx: typer.Context,
    include_caution: Annotated[
        bool,
        typer.Option(
            "--include-caution",
            help="Also remove items classified as caution.",
        ),
    ] = False,
    categories: Annotated[
        list[CleanupCategory] | None,
        typer.Option(
            "--category",
            "-c",
            help="Category to clean (repeatable). Cleans everything by default.",
            case_sensitive=False,
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt and proceed.",
        ),
    ] = False,
    snapshot: Annotated[
        bool | None,
        typer.Option(
            "--snapshot/--no-snapshot",
            help="Create a local snapshot before removing anything (defaults to config).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be removed without removing it.",
        ),
    ] = False,
    lang: Annotated[
        Language | None,
        typer.Option(
            "--lang",
            "-l",
            help="Language for reasons (defaults to config).",
            case_sensitive=False,
        ),
    ] = None,
) -> None:
    """Scan and remove cleanup candidates.

    Only safe items are removed unless --include-caution is given. Risky
    items are never removed.

    Examples:
        opencleaner cleanup                     # Remove safe items after confirmation
        opencleaner cleanup --include-caution   # Also remove caution items
        opencleaner cleanup -c trash --yes      # Empty the Trash without prompting
        opencleaner cleanup --dry-run           # Preview only
        opencleaner cleanup --snapshot          # Take a local snapshot first
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config()
    language = lang or config.language

    engine = create_engine()
    try:
        result = engine.scan(categories or None)
    except (ScanError, OSError) as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(code=1) from e

    selected = select_items(result.items, include_caution)
    if not selected:
        print_info("No items to clean up.")
        return

    console.print(create_candidates_table(selected, language, title="Items to Remove"))
    print_risk_breakdown(selected, language)
    console.print(f"\nTotal: [info]{format_size(sum(item.size for item in selected))}[/]")

    if dry_run:
        print_info("Dry run: nothing was removed.")
        return

    if not yes and not _confirm_cleanup(selected):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    manager = create_safety_manager(config)

    take_snapshot = config.snapshot_before_cleanup if snapshot is None else snapshot
    if take_snapshot:
        _take_snapshot(manager, yes)

    results = manager.cleanup(selected)

    console.print()
    console.print(create_results_table(results))
    print_results_summary(results)

    if any(r.failed for r in results):
        raise typer.Exit(code=1)

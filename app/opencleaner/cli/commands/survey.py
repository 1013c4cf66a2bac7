"""Survey command implementation.

Scans the system for reclaimable files and reports them without
changing anything.
"""

from pathlib import Path
from typing import Annotated

import typer

from opencleaner.cli.display import create_candidates_table, print_risk_breakdown
from opencleaner.cli.types import OutputFormat, create_engine
from opencleaner.core.config import require_config
from opencleaner.core.engine import ScanError
from opencleaner.core.report import ReportFormat, ReportGenerator
from opencleaner.models.item import CleanupCategory, Language
from opencleaner.utils.fs import format_size
from opencleaner.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Scan for reclaimable files without deleting anything.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def survey(
    ctx: typer.Context,
    categories: Annotated[
        list[CleanupCategory] | None,
        typer.Option(
            "--category",
            "-c",
            help="Category to scan (repeatable). Scans everything by default.",
            case_sensitive=False,
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table, json, or markdown.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    lang: Annotated[
        Language | None,
        typer.Option(
            "--lang",
            "-l",
            help="Language for reasons and reports (defaults to config).",
            case_sensitive=False,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the json or markdown report to a file.",
        ),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Limit number of items shown in the table.",
        ),
    ] = None,
) -> None:
    """Scan and display cleanup candidates.

    Examples:
        opencleaner survey                          # Scan everything, show table
        opencleaner survey -c user_cache -c logs    # Only caches and logs
        opencleaner survey --format markdown        # Markdown report on stdout
        opencleaner survey -f json -o scan.json     # Save JSON report
        opencleaner survey --lang ja                # Japanese reasons
    """
    if ctx.invoked_subcommand is not None:
        return

    if output is not None and output_format == OutputFormat.TABLE:
        print_error("--output requires --format json or --format markdown.")
        raise typer.Exit(code=1)

    config = require_config()
    language = lang or config.language

    engine = create_engine()
    try:
        result = engine.scan(categories or None)
    except (ScanError, OSError) as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(code=1) from e

    if output_format != OutputFormat.TABLE:
        generator = ReportGenerator(ReportFormat(output_format.value), language)
        report = generator.generate(result)

        if output is None:
            typer.echo(report)
            return

        output = output.resolve()
        if output.is_dir():
            print_error(f"Output path is a directory: {output}")
            raise typer.Exit(code=1)
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(report, encoding="utf-8")
        except OSError as e:
            print_error(f"Failed to write report: {e}")
            raise typer.Exit(code=1) from e
        print_info(f"Report written to {output}")
        return

    if not result.items:
        print_success("Nothing to clean up.")
        return

    display_items = result.items[:limit] if limit else result.items
    console.print(create_candidates_table(display_items, language))

    summary = f"Showing {len(display_items)} of {len(result.items)} items"
    if limit and len(display_items) < len(result.items):
        summary += f" (limited to {limit})"
    console.print(f"\n[dim]{summary}, scanned in {result.scan_duration:.2f}s[/]")

    print_risk_breakdown(result.items, language)
    console.print(
        f"\nTotal: [info]{result.total_size_human}[/], "
        f"safe to delete: [risk_safe]{format_size(result.safe_total_size)}[/]"
    )


"""Scan command implementation.

Finds reclaimable files and saves them as the last scan so that
``reclaim delete`` can act on their ids.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from reclaim.cli.display import (
    export_records,
    persist_snapshot,
    print_records,
    print_records_json,
    print_summary,
    run_scan,
)
from reclaim.core.config import load_config_or_default
from reclaim.core.errors import ConfigError
from reclaim.core.orchestrator import ScanOrchestrator
from reclaim.models.status import ScanOptions
from reclaim.utils.formatting import print_error, print_success, print_warning

app = typer.Typer(
    help="Scan folders for reclaimable files.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@app.callback(invoke_without_command=True)
def scan_files(
    ctx: typer.Context,
    path: Annotated[
        Path | None,
        typer.Option(
            "--path",
            "-p",
            help="Scan only this directory instead of the default roots.",
        ),
    ] = None,
    duplicates: Annotated[
        bool,
        typer.Option("--duplicates/--no-duplicates", help="Detect duplicate files."),
    ] = True,
    logs: Annotated[
        bool,
        typer.Option("--logs/--no-logs", help="Detect log files."),
    ] = True,
    temp: Annotated[
        bool,
        typer.Option("--temp/--no-temp", help="Detect temp and cache files."),
    ] = True,
    empty: Annotated[
        bool,
        typer.Option("--empty/--no-empty", help="Detect empty files."),
    ] = True,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export scan results to JSON file.",
        ),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Limit number of records to display.",
            min=0,
        ),
    ] = None,
) -> None:
    """Scan for duplicates, logs, temp/cache and empty files.

    Examples:
        reclaim scan                          # Scan the default roots
        reclaim scan --path ~/Downloads       # Scan a single folder
        reclaim scan --no-duplicates          # Skip content hashing
        reclaim scan --format json            # Output as JSON
        reclaim scan --export scan.json       # Export to JSON file
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    try:
        config = load_config_or_default()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    options = ScanOptions(
        duplicates=duplicates,
        logs=logs,
        temp=temp,
        empty=empty,
        path=str(path) if path is not None else None,
    )
    orchestrator = ScanOrchestrator(config)

    roots = orchestrator.resolve_roots(options)
    if not roots:
        print_warning("None of the scan roots exist.")

    show_progress = not quiet and output_format == OutputFormat.TABLE
    records = run_scan(orchestrator, options, show_progress=show_progress)
    persist_snapshot(records, roots)

    if export_path is not None:
        export_records(records, export_path)

    display = records[:limit] if limit is not None else records

    if output_format == OutputFormat.JSON:
        print_records_json(display)
        return

    if not records:
        print_success("Nothing to reclaim. No matching files found.")
        return

    print_records(display)
    print_summary(records)

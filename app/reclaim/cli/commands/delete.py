"""Delete command implementation.

Deletes records of the last saved scan by id.
"""

from typing import Annotated

import typer

from reclaim.cli.display import confirm_deletion, print_outcomes
from reclaim.core.config import load_config_or_default
from reclaim.core.errors import ConfigError, SnapshotError
from reclaim.core.snapshot import load_snapshot, save_snapshot
from reclaim.operator.deleter import DeletionEngine
from reclaim.utils.formatting import print_error, print_info, print_warning

app = typer.Typer(
    help="Delete files from the last scan by record id.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def delete_records(
    ctx: typer.Context,
    ids: Annotated[
        list[str] | None,
        typer.Option(
            "--id",
            "-i",
            help="Record id to delete (repeatable).",
        ),
    ] = None,
    selected: Annotated[
        bool,
        typer.Option("--selected", help="Delete every pre-selected record."),
    ] = False,
    secure: Annotated[
        bool,
        typer.Option("--secure", help="Zero the start of each file before deleting."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete files found by the last scan.

    Examples:
        reclaim delete --id d12 --id l3       # Delete two records
        reclaim delete --selected --secure    # Wipe and delete all pre-selected
        reclaim delete --selected --dry-run   # Preview
    """
    if ctx.invoked_subcommand is not None:
        return

    try:
        config = load_config_or_default()
        snapshot = load_snapshot()
    except (ConfigError, SnapshotError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if snapshot is None:
        print_error("No saved scan found. Run 'reclaim scan' first.")
        raise typer.Exit(code=1)

    store = snapshot.to_store()
    by_id = {r.id: r for r in snapshot.records}

    requested = list(ids or [])
    if selected:
        requested.extend(r.id for r in snapshot.records if r.selected and r.id not in requested)

    if not requested:
        print_info("Nothing to delete. Pass --id or --selected.")
        return

    unknown = [i for i in requested if i not in by_id]
    for record_id in unknown:
        print_warning(f"Unknown record id (skipped): {record_id}")

    known = [i for i in requested if i in by_id]
    if not known:
        return

    if not dry_run and not yes:
        confirm_deletion(len({by_id[i].path for i in known}), secure)

    engine = DeletionEngine(store, dry_run=dry_run, wipe_limit_bytes=config.wipe_limit_bytes)
    outcomes = engine.delete(requested, secure=secure)
    print_outcomes(outcomes, by_id)

    if not dry_run:
        try:
            save_snapshot(snapshot.with_records(store.records()))
        except SnapshotError as e:
            print_warning(str(e))

    if any(not o.success for o in outcomes):
        raise typer.Exit(code=1)

"""Command-line interface for the Toggl to Asana synchronizer."""

import logging
import sys
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from toggl_asana_sync import __version__
from toggl_asana_sync.asana import AsanaClient
from toggl_asana_sync.config import load_settings
from toggl_asana_sync.exceptions import ConfigurationError, LedgerError, RemoteFetchError
from toggl_asana_sync.sync import SyncEngine, SyncLedger, SyncResult
from toggl_asana_sync.toggl import TogglClient
from toggl_asana_sync.utils import get_logger, setup_logging

app = typer.Typer(help="Synchronize Toggl time entries to Asana time tracking")
console = Console()
logger = get_logger(__name__)


def _parse_date(value: str | None, option: str) -> date | None:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        console.print(f"[red]Invalid date for {option}: {value!r}. Use YYYY-MM-DD[/red]")
        raise typer.Exit(code=2)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"Toggl to Asana Sync v{__version__}")
        raise typer.Exit()


def _print_result(result: SyncResult, dry_run: bool) -> None:
    title = "Sync Results (dry run)" if dry_run else "Sync Results"
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="magenta")
    table.add_row("Tasks synced", str(result.tasks_synced))
    table.add_row("Tasks already synced", str(result.tasks_already_synced))
    table.add_row("Tasks skipped (not Asana)", str(result.tasks_skipped))
    table.add_row("Tasks failed", str(result.tasks_failed))
    table.add_row("Entries created", str(result.entries_created))
    table.add_row("Entries already in Asana", str(result.entries_existing))

    console.print(table)

    if result.errors:
        console.print("\n[red]Errors:[/red]")
        for error in result.errors:
            console.print(f"  - {error}")


@app.command()
def sync(
    from_date: Optional[str] = typer.Option(
        None,
        "--from-date",
        help="Start date for sync (YYYY-MM-DD). Defaults to --days before the end date.",
    ),
    to_date: Optional[str] = typer.Option(
        None,
        "--to-date",
        help="End date for sync (YYYY-MM-DD). Defaults to today.",
    ),
    days: int = typer.Option(
        1,
        "--days",
        min=0,
        help="Number of days before the end date to include when --from-date is not given.",
    ),
    all_users: bool = typer.Option(
        False,
        "--all-users",
        help="Sync time entries of all workspace members (Reports API).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be synced without creating entries or updating the ledger.",
    ),
    ledger: Optional[Path] = typer.Option(
        None,
        "--ledger",
        help="Ledger file. Defaults to SYNC_LEDGER_PATH or ./synced-entries.json.",
    ),
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        help="Directory for the log file. Defaults to SYNC_LOG_DIR; console only if unset.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version information and exit.",
    ),
) -> None:
    """Synchronize Toggl time entries to Asana."""
    end_dt = _parse_date(to_date, "--to-date") or date.today()
    start_dt = _parse_date(from_date, "--from-date") or end_dt - timedelta(days=days)

    if start_dt > end_dt:
        console.print("[red]--from-date must not be after --to-date[/red]")
        raise typer.Exit(code=2)

    try:
        settings = load_settings(ledger_path=ledger, log_dir=log_dir)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    setup_logging(
        log_level=logging.DEBUG if verbose else logging.INFO,
        log_dir=settings.log_dir,
    )
    logger.info(f"Toggl to Asana Sync v{__version__}")

    try:
        with TogglClient(
            api_token=settings.toggl_api_token,
            workspace_id=settings.toggl_workspace_id,
            timeout=settings.http_timeout,
        ) as toggl_client, AsanaClient(
            token=settings.asana_token,
            timeout=settings.http_timeout,
        ) as asana_client:
            engine = SyncEngine(
                toggl_client=toggl_client,
                asana_client=asana_client,
                ledger=SyncLedger(settings.ledger_path),
            )

            mode_str = "[bold cyan]DRY RUN[/bold cyan]" if dry_run else "[bold green]SYNC[/bold green]"
            console.print(f"Starting {mode_str} mode ({start_dt} to {end_dt})...")

            result = engine.sync(
                start_date=start_dt,
                end_date=end_dt,
                all_users=all_users,
                dry_run=dry_run,
            )

        _print_result(result, dry_run)
        exit_code = 0 if result.tasks_failed == 0 else 1
        raise typer.Exit(code=exit_code)

    except (RemoteFetchError, httpx.HTTPError) as e:
        logger.error(f"Could not fetch Toggl time entries: {e}")
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    except LedgerError as e:
        logger.error(str(e))
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        console.print(f"[red]Unexpected error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""CLI application for MediaVault using Rich and Typer."""

import asyncio
import logging
from collections import Counter
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from mediavault.core.config import (
    DATABASE_PATH,
    DELETE_ORIGINALS,
    MEDIA_DIR,
    validate_environment,
)
from mediavault.core.store import VaultStore
from mediavault.core.types import EntryKind, SortMode
from mediavault.pickers import DirectoryPicker
from mediavault.storage import SqliteBackend

app = typer.Typer(
    name="mediavault",
    help="MediaVault CLI - Your private media collection",
    no_args_is_help=True,
)

console = Console()

DB_OPTION_HELP = "Path to the vault database (default: ~/.mediavault/mediavault.db)"


def _open_store(db: Optional[str]) -> VaultStore:
    """Open the vault store on the given database, or the default one."""
    ok, message = validate_environment()
    if not ok:
        console.print(f"[red]{message}[/red]")
        raise typer.Exit(1)
    return VaultStore(SqliteBackend(Path(db) if db else DATABASE_PATH))


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        # basicConfig is a no-op once main() has installed a handler
        logging.getLogger().setLevel(logging.DEBUG)
        console.print("[dim]Debug logging enabled[/dim]")


def _finish(store: VaultStore) -> None:
    """Close the store, warning when the last save never reached disk."""
    if store.has_unsaved_changes and not store.flush():
        console.print("[red]Vault changes could not be saved.[/red]")
        store.close()
        raise typer.Exit(1)
    store.close()


@app.command("list")
def list_files(
    sort: Optional[SortMode] = typer.Option(
        None,
        "--sort",
        "-s",
        help="Order to display entries in",
    ),
    db: Optional[str] = typer.Option(None, "--db", help=DB_OPTION_HELP),
):
    """List the entries in the vault."""
    store = _open_store(db)
    if sort is not None:
        store.sort_files(sort)

    if store.is_empty:
        console.print("[dim]Vault is empty.[/dim]")
        store.close()
        return

    table = Table(title=f"Vault ({store.total_files} files)", show_header=True)
    table.add_column("#", style="dim")
    table.add_column("Location")
    table.add_column("Kind", style="cyan")
    table.add_column("Imported")
    table.add_column("Encrypted")

    for i, entry in enumerate(store.files, 1):
        table.add_row(
            str(i),
            entry.location,
            entry.kind.value,
            entry.imported_at.strftime("%Y-%m-%d %H:%M"),
            "yes" if entry.is_encrypted else "",
        )

    console.print(table)
    store.close()


@app.command("import")
def import_files(
    source: Path = typer.Argument(..., help="Directory to import media from"),
    recursive: bool = typer.Option(
        False, "--recursive", "-r", help="Include subdirectories"
    ),
    delete_originals: bool = typer.Option(
        DELETE_ORIGINALS,
        "--delete-originals/--keep-originals",
        help="Remove source files once they are in the vault",
    ),
    db: Optional[str] = typer.Option(None, "--db", help=DB_OPTION_HELP),
    media_dir: Optional[str] = typer.Option(
        None,
        "--media-dir",
        help="Directory picked files are copied into (default: ~/.mediavault/media)",
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """Import images and videos from a directory."""
    _configure_logging(debug)
    store = _open_store(db)
    picker = DirectoryPicker(
        source,
        staging_dir=Path(media_dir) if media_dir else MEDIA_DIR,
        recursive=recursive,
    )

    with console.status("[bold blue]Importing...[/bold blue]"):
        added = asyncio.run(
            store.import_files(delete_originals=delete_originals, picker=picker)
        )

    if added == 0:
        console.print("[yellow]Nothing new to import.[/yellow]")
    else:
        console.print(
            f"[green]Imported {added} files ({store.total_files} in vault)[/green]"
        )
    _finish(store)


@app.command()
def remove(
    locations: list[str] = typer.Argument(..., help="Vault locations to remove"),
    db: Optional[str] = typer.Option(None, "--db", help=DB_OPTION_HELP),
):
    """Remove entries from the vault (files on disk are left alone)."""
    store = _open_store(db)

    missing = []
    for location in locations:
        entry = store.find(location)
        if entry is None:
            missing.append(location)
        elif not store.is_selected(entry):
            store.toggle_selection(entry)

    for location in missing:
        console.print(f"[yellow]Not in vault: {location}[/yellow]")

    if store.is_selection_mode:
        count = store.selected_count
        store.delete_selected()
        console.print(f"[green]Removed {count} entries[/green]")
    _finish(store)

    if missing:
        raise typer.Exit(1)


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    db: Optional[str] = typer.Option(None, "--db", help=DB_OPTION_HELP),
):
    """Remove every entry from the vault."""
    store = _open_store(db)
    if not yes and not typer.confirm(
        f"Remove all {store.total_files} entries from the vault?"
    ):
        console.print("[dim]Cancelled.[/dim]")
        store.close()
        raise typer.Exit(0)

    store.clear_vault()
    console.print("[green]Vault cleared[/green]")
    _finish(store)


@app.command()
def stats(
    db: Optional[str] = typer.Option(None, "--db", help=DB_OPTION_HELP),
):
    """Show vault totals."""
    store = _open_store(db)
    kinds = Counter(entry.kind for entry in store.files)

    table = Table(title="Vault Stats", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    table.add_row("Total", str(store.total_files))
    table.add_row("Images", str(kinds[EntryKind.IMAGE]))
    table.add_row("Videos", str(kinds[EntryKind.VIDEO]))
    table.add_row(
        "Encrypted", str(sum(1 for entry in store.files if entry.is_encrypted))
    )

    console.print(table)
    store.close()


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()

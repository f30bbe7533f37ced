"""Scan a project root and summarize the registry it produces."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from ..console import console
from ..exceptions import ResolverError
from ..settings import get_settings
from ..state import ResolverState
from ..state import create_resolver_state


def scan_project(root: Path, extensions: tuple[str, ...] = ()) -> ResolverState:
    """Build a ResolverState for root using configured core modules and extensions.

    Raises:
        click.ClickException: The scan failed (e.g. malformed package.json)
    """
    settings = get_settings()
    state = create_resolver_state(settings)
    try:
        state.load_files(root, list(extensions) or settings.get_extensions())
    except ResolverError as e:
        raise click.ClickException(str(e)) from e
    return state


@click.command("scan")
@click.argument("root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--ext", "extensions", multiple=True, help="Extension to index (repeatable, default: js, json)")
@click.option("--directories/--no-directories", "show_directories", default=True, help="List directory entries")
def scan_cmd(root: Path, extensions: tuple[str, ...], show_directories: bool):
    """Scan ROOT and show what the registry contains.

    Examples:
      commonjs-resolver scan ./app
      commonjs-resolver scan ./app --ext js --ext json --ext node
    """
    state = scan_project(root, extensions)
    snapshot = state.export()

    summary = Table(title=f"Registry: {root}", show_header=True, header_style="bold cyan")
    summary.add_column("Kind", style="cyan")
    summary.add_column("Count", justify="right")
    summary.add_row("Files", str(state.registry.file_count))
    summary.add_row("Directories", str(state.registry.directory_count))
    summary.add_row("Core modules", str(state.registry.core_count))
    console.print(summary)

    if show_directories and snapshot.directories:
        table = Table(title="Directory Entries", show_header=True, header_style="bold cyan")
        table.add_column("Directory", style="cyan")
        table.add_column("Main", style="green")
        for entry in snapshot.directories:
            table.add_row(entry.id, entry.path)
        console.print(table)

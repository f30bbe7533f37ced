"""Write a registry snapshot as JSON."""

from __future__ import annotations

from pathlib import Path

import click

from ..console import console
from .scan import scan_project


@click.command("export")
@click.argument("root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write to file instead of stdout")
@click.option("--ext", "extensions", multiple=True, help="Extension to index (repeatable, default: js, json)")
def export_cmd(root: Path, output: Path | None, extensions: tuple[str, ...]):
    """Scan ROOT and export the registry snapshot as JSON.

    The snapshot can be reused with `resolve --registry FILE`.
    """
    state = scan_project(root, extensions)
    payload = state.export().model_dump_json(indent=2)

    if output is None:
        click.echo(payload)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload + "\n", encoding="utf-8")
    console.print(f"[green]✓ Wrote registry snapshot to {output}[/green]")

"""Resolve module requests from the command line."""

from __future__ import annotations

import json
from pathlib import Path

import click
from pydantic import ValidationError

from ..console import err_console
from ..state import ResolverState
from ..state import create_resolver_state
from .scan import scan_project


def _load_state(root: Path | None, registry_file: Path | None, extensions: tuple[str, ...]) -> ResolverState:
    if root is not None:
        return scan_project(root, extensions)
    try:
        return create_resolver_state(registry_file=registry_file)
    except (json.JSONDecodeError, ValidationError) as e:
        raise click.ClickException(f"Invalid registry snapshot {registry_file}: {e}") from e


@click.command("resolve")
@click.argument("requests", nargs=-1, required=True)
@click.option("--base", "-b", "base_path", default="/", show_default=True, help="Directory of the requiring module")
@click.option(
    "--root", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Project root to scan first"
)
@click.option(
    "--registry",
    "registry_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Registry snapshot written by `export`",
)
@click.option("--ext", "extensions", multiple=True, help="Extension to index when scanning --root")
@click.option("--strict", is_flag=True, help="Exit with status 1 if any request is left unresolved")
def resolve_cmd(
    requests: tuple[str, ...],
    base_path: str,
    root: Path | None,
    registry_file: Path | None,
    extensions: tuple[str, ...],
    strict: bool,
):
    """Resolve each REQUEST and print one module id per line.

    Unresolved requests are printed unchanged.

    Examples:
      commonjs-resolver resolve ./util --base /lib --root ./app
      commonjs-resolver resolve lodash backbone --registry registry.json
    """
    if (root is None) == (registry_file is None):
        raise click.UsageError("Pass exactly one of --root or --registry")

    state = _load_state(root, registry_file, extensions)

    unresolved = []
    for request in requests:
        result, rule = state.resolve_with_rule(request, base_path)
        if rule is None:
            unresolved.append(request)
        click.echo(result)

    if strict and unresolved:
        for request in unresolved:
            err_console.print(f"[red]Unresolved:[/red] {request} (from {base_path})")
        raise SystemExit(1)

"""Core module override commands.

Core modules are matched by exact id before any file or package lookup, so
they can never be shadowed by project files.
"""

from __future__ import annotations

from typing import cast

import click
from rich.table import Table

from ..console import console
from ..settings import Scope
from ..settings import get_settings


@click.group(name="core")
def core():
    """Manage core module overrides.

    Examples:
        commonjs-resolver core list
        commonjs-resolver core add backbone /alloy/backbone.js --project
        commonjs-resolver core remove backbone --project
    """
    pass


@core.command("list")
def core_list():
    """Show core modules from all scopes (local > project > global)."""
    modules = get_settings().get_core_modules()
    if not modules:
        console.print("[yellow]No core modules configured[/yellow]")
        return

    table = Table(title="Core Modules", show_header=True, header_style="bold cyan")
    table.add_column("Id", style="cyan")
    table.add_column("Path", style="green")
    for module in modules:
        table.add_row(module.id, module.path)
    console.print(table)


@core.command("add")
@click.argument("module_id")
@click.argument("path")
@click.option("--local", "scope_flag", flag_value="local", help="Add locally (just you)")
@click.option("--project", "scope_flag", flag_value="project", help="Add for project (team)")
@click.option("--global", "scope_flag", flag_value="global", help="Add globally (all projects)")
def core_add(module_id: str, path: str, scope_flag: str | None):
    """Map MODULE_ID to PATH as a core module."""
    scope = cast(Scope, scope_flag or "project")
    get_settings().set_core_module(module_id, path, scope)
    console.print(f"[green]✓ Added core module {module_id}[/green] -> {path}")
    console.print(f"  Scope: {scope}")


@core.command("remove")
@click.argument("module_id")
@click.option("--local", "scope_flag", flag_value="local", help="Remove from local")
@click.option("--project", "scope_flag", flag_value="project", help="Remove from project")
@click.option("--global", "scope_flag", flag_value="global", help="Remove from global")
def core_remove(module_id: str, scope_flag: str | None):
    """Remove the core module override MODULE_ID."""
    scope = cast(Scope, scope_flag or "project")
    if get_settings().remove_core_module(module_id, scope):
        console.print(f"[green]✓ Removed core module {module_id}[/green] from {scope}")
    else:
        console.print(f"[yellow]Core module {module_id} not set at {scope} scope[/yellow]")

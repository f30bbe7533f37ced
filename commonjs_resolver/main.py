"""commonjs-resolver - resolve CommonJS module requests against a scanned project."""

import logging

import click

from .commands.core import core as core_group
from .commands.export import export_cmd
from .commands.resolve import resolve_cmd
from .commands.scan import scan_cmd
from .logging_setup import init_json_logging
from .settings import get_settings

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="commonjs-resolver")
@click.option(
    "--log-level",
    type=click.Choice(["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for the JSONL log file (default: settings or INFO)",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="JSONL log file path")
def cli(log_level: str | None, log_file: str | None):
    """Resolve CommonJS require() specifiers using a precomputed registry."""
    settings = get_settings()
    init_json_logging(path=log_file or settings.get_log_file(), level=log_level or settings.get_log_level())
    logger.debug("CLI started")


cli.add_command(scan_cmd)
cli.add_command(resolve_cmd)
cli.add_command(export_cmd)
cli.add_command(core_group)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

"""
CLI interface for the service graph toolkit using Click.
"""

from pathlib import Path
from typing import Any

import click

from .. import __version__
from ..shared.logging import get_logger, setup_logging
from .commands.convert import convert
from .commands.summary import summary


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Enable quiet mode")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write log records to this file",
)
@click.option("--plain-logs", is_flag=True, help="Plain text log lines instead of Rich output")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: Any, verbose: bool, quiet: bool, log_file: Path | None, plain_logs: bool) -> None:
    """Service Graph Toolkit - Convert traffic graphs into Cytoscape documents."""
    ctx.ensure_object(dict)

    ctx.obj["global_flags"] = {"verbose": verbose, "quiet": quiet}

    if quiet:
        log_level = "WARNING"
    elif verbose:
        log_level = "DEBUG"
    else:
        log_level = "INFO"

    setup_logging(log_level, log_file=log_file, use_rich=not plain_logs)
    ctx.obj["logger"] = get_logger()


cli.add_command(convert)
cli.add_command(summary)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

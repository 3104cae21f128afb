"""
Utilities shared by CLI commands.
"""

from typing import Any

import click

from .output import CLIOutputManager, create_output_manager


def get_cli_flags(ctx: click.Context) -> dict[str, Any]:
    """Extract CLI flags from Click context, traversing parent contexts."""
    flags: dict[str, Any] = {}

    # Walk from the root down so child options override parent ones
    chain = []
    current_ctx: click.Context | None = ctx
    while current_ctx:
        chain.append(current_ctx)
        current_ctx = current_ctx.parent

    for item in reversed(chain):
        if item.params:
            flags.update(item.params)

    return flags


def get_output_manager_from_context(ctx: click.Context) -> CLIOutputManager:
    """Create output manager from Click context flags."""
    flags = get_cli_flags(ctx)

    quiet = flags.get("quiet", False)
    verbose = flags.get("verbose", False)

    return create_output_manager(quiet=quiet, verbose=verbose)

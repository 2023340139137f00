"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from pcli2_mcp.cli_commands.config import config_cmd
    from pcli2_mcp.cli_commands.help import help_cmd
    from pcli2_mcp.cli_commands.serve import serve

    cli.add_command(serve)
    cli.add_command(config_cmd)
    cli.add_command(help_cmd)

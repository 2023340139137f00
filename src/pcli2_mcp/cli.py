"""pcli2-mcp CLI entrypoint."""

from __future__ import annotations

import click

from pcli2_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="pcli2-mcp")
def main() -> None:
    """pcli2-mcp: MCP server over HTTP for the Physna CLI."""


# Register subcommands
from pcli2_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()

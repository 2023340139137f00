"""``pcli2-mcp help``: show help for the CLI or one of its commands."""

from __future__ import annotations

import click


@click.command("help")
@click.argument("command", required=False)
@click.pass_context
def help_cmd(ctx: click.Context, command: str | None) -> None:
    """Show help for COMMAND, or for pcli2-mcp itself."""
    group = ctx.parent.command if ctx.parent is not None else None
    if not isinstance(group, click.Group):
        click.echo(ctx.get_help())
        return
    if command is None:
        click.echo(group.get_help(ctx.parent))
        return

    sub = group.get_command(ctx, command)
    if sub is None:
        raise click.UsageError(f"No such command '{command}'.", ctx=ctx)
    with click.Context(sub, info_name=command, parent=ctx.parent) as sub_ctx:
        click.echo(sub.get_help(sub_ctx))

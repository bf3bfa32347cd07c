"""Subcommand modules for micropress.

Provides register_commands() which uses deferred imports to keep
``micropress --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from micropress.commands.apply import apply
    from micropress.commands.create import create
    from micropress.commands.source import source
    from micropress.commands.update import delete, undelete, update

    cli.add_command(create)
    cli.add_command(update)
    cli.add_command(delete)
    cli.add_command(undelete)
    cli.add_command(source)
    cli.add_command(apply)

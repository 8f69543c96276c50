"""Subcommand modules for cdnctl.

Provides register_commands() which uses deferred imports to keep
``cdnctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    4 groups (have subcommands) + 4 standalone commands.
    """
    # --- Groups ---
    from cdnctl.commands.binding import binding
    from cdnctl.commands.category import category
    from cdnctl.commands.default import default
    from cdnctl.commands.domain import domain

    cli.add_command(domain)
    cli.add_command(category)
    cli.add_command(default)
    cli.add_command(binding)

    # --- Standalone commands ---
    from cdnctl.commands.files import delete, ls, upload
    from cdnctl.commands.serve import serve

    cli.add_command(upload)
    cli.add_command(delete)
    cli.add_command(ls)
    cli.add_command(serve)

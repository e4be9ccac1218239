"""Subcommand modules for postlint.

Provides register_commands() which uses deferred imports to keep
``postlint --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from postlint.commands.categories import categories
    from postlint.commands.check import check
    from postlint.commands.list_cmd import list_cmd
    from postlint.commands.new import new
    from postlint.commands.rules import rules
    from postlint.commands.show import show

    cli.add_command(check)
    cli.add_command(rules)
    cli.add_command(list_cmd)
    cli.add_command(show)
    cli.add_command(categories)
    cli.add_command(new)

"""Subcommand modules for eagov.

Provides register_commands() which uses deferred imports to keep
``eagov --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from eagov.commands.roles import roles
    from eagov.commands.rules import rules
    from eagov.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(rules)
    cli.add_command(roles)

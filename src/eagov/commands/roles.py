"""Command: describe repository roles and permissions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from eagov.commands._base import EagovCommand

if TYPE_CHECKING:
    from eagov.commands._context import AppContext


@click.command(
    cls=EagovCommand,
    examples="""\
  eagov roles
  eagov roles Viewer
  eagov --json roles Architect""",
)
@click.argument("role", required=False)
@click.pass_obj
def roles(app: AppContext, role: str | None) -> None:
    """Show permissions for every role, or for ROLE only."""
    app.emit(app.service.list_roles(role))

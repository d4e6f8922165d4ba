"""Command: list the active governance rule catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from eagov.commands._base import EagovCommand

if TYPE_CHECKING:
    from eagov.commands._context import AppContext


@click.command(
    cls=EagovCommand,
    examples="""\
  eagov rules
  eagov --json rules
  eagov -q rules""",
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List governance rules in evaluation order."""
    app.emit(app.service.list_rules())

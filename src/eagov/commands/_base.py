"""Click command class shared by the eagov subcommands.

``--help`` stays short; ``--examples`` prints sample invocations and exits
before FILE or ROLE arguments are checked.
"""

from __future__ import annotations

import inspect
from typing import Any

import click


class EagovCommand(click.Command):
    """Command taking an ``examples`` block for its ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = inspect.cleandoc(examples) if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in self.examples.splitlines() if self.examples else ():
            click.echo(f"  {line}")
        ctx.exit(0)

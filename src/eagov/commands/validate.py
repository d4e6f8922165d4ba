"""Command: validate a repository document against the governance catalog."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from eagov.commands._base import EagovCommand
from eagov.domain.access import Role
from eagov.domain.types import GovernanceMode, LifecycleCoverage

if TYPE_CHECKING:
    from eagov.commands._context import AppContext


@click.command(
    cls=EagovCommand,
    examples="""\
  eagov validate repository.yaml
  eagov validate repository.json --mode Advisory
  eagov validate repository.yaml --coverage To-Be
  eagov --json validate repository.yaml --role Architect""",
)
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--mode",
    type=click.Choice([m.value for m in GovernanceMode], case_sensitive=False),
    default=None,
    help="Governance mode (overrides document metadata and config).",
)
@click.option(
    "--coverage",
    type=click.Choice([c.value for c in LifecycleCoverage], case_sensitive=False),
    default=None,
    help="Lifecycle states to examine (overrides document metadata and config).",
)
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role], case_sensitive=False),
    default=None,
    help="Role requesting the export (defaults to access.default_role).",
)
@click.pass_obj
def validate(
    app: AppContext,
    file: Path,
    mode: str | None,
    coverage: str | None,
    role: str | None,
) -> None:
    """Validate FILE; exit 1 if governance rejects it."""
    app.emit(app.service.check_file(file, role=role, mode=mode, coverage=coverage))

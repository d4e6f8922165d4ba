"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides the governance service and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from eagov.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from eagov.config.settings import EagovSettings
    from eagov.services.governance import GovernanceService
    from eagov.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The service is created lazily so ``--help`` and ``--version`` never
    build a rule engine.
    """

    def __init__(self, settings: EagovSettings) -> None:
        self.settings = settings
        self._service: GovernanceService | None = None

        from eagov.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from eagov.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> GovernanceService:
        if self._service is None:
            from eagov.services.governance import GovernanceService

            self._service = GovernanceService(self.settings)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure (including a governance rejection): writes to stderr,
          exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output and not settings.quiet:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(result.exit_code)

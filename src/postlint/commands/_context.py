"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Provides lazy Site construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postlint.config.logging import configure_logging
from postlint.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from postlint.config.settings import PostlintSettings
    from postlint.infrastructure.site import Site
    from postlint.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: PostlintSettings) -> None:
        self.settings = settings
        self._site: Site | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from postlint.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def site(self) -> Site:
        """The site (created lazily on first access)."""
        if self._site is None:
            from postlint.infrastructure.site import Site

            self._site = Site(self.settings)
        return self._site

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr in human mode so
          they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

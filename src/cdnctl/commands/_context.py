"""The object every command receives through ``@click.pass_obj``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cdnctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cdnctl.config.settings import CdnSettings
    from cdnctl.infrastructure.depot import Depot
    from cdnctl.services.result import ServiceResult


class AppContext:
    """Settings, the lazily opened depot, and result emission.

    Opening the depot creates the storage directory and catalog files,
    so it waits until a command actually asks for it. ``--help``,
    ``--version`` and ``--examples`` leave the disk alone.
    """

    def __init__(self, settings: CdnSettings) -> None:
        from cdnctl.config.logging import configure_logging

        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        self._depot: Depot | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def depot(self) -> Depot:
        if self._depot is None:
            self._depot = self._open_depot()
        return self._depot

    def _open_depot(self) -> Depot:
        from cdnctl.domain.errors import CdnError
        from cdnctl.infrastructure.depot import Depot

        try:
            return Depot(self.settings)
        except CdnError as exc:
            # A malformed bindings file or an unusable storage root.
            raise click.ClickException(str(exc)) from exc

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result goes to stderr and exits 1.

        Successful output is the only thing written to stdout, so
        ``cdnctl -q upload ...`` can be piped straight into other tools.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        self._echo_warnings(result.warnings)

    def _echo_warnings(self, warnings: list[str]) -> None:
        # JSON already carries them in the payload; quiet means quiet.
        if self.output.json_output or self.output.quiet:
            return
        for warning in warnings:
            click.echo(f"WARNING: {warning}", err=True)

"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to every command via
``@click.pass_obj``.  Owns the lazily created API client, prompting, and
centralized result emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gendocs.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from gendocs.config.settings import GendocsSettings
    from gendocs.infrastructure.api import GendocsClient
    from gendocs.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The API client is created on first use so ``--help`` and
    ``--version`` never open a connection pool.
    """

    def __init__(self, settings: GendocsSettings) -> None:
        self.settings = settings
        self._client: GendocsClient | None = None

        from gendocs.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from gendocs.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def client(self) -> GendocsClient:
        """The API client (created lazily on first access)."""
        if self._client is None:
            from gendocs.infrastructure.api import GendocsClient

            self._client = GendocsClient(
                self.settings.api.base_url,
                timeout=self.settings.api.timeout,
            )
        return self._client

    @property
    def interactive(self) -> bool:
        return not self.settings.no_interact

    @property
    def human_output(self) -> bool:
        """True when progress lines may be printed alongside results."""
        return not (self.settings.json_output or self.settings.quiet)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def prompt(self, text: str, *, hide_input: bool = False, option: str | None = None) -> str:
        """Prompt for a value, or fail cleanly in ``--no-interact`` mode."""
        if not self.interactive:
            hint = f" Pass {option}." if option else ""
            raise click.UsageError(f"{text} is required in non-interactive mode.{hint}")
        value: str = click.prompt(text, hide_input=hide_input, err=True)
        return value.strip()

    def resolve_token(self, explicit: str | None = None) -> str:
        """Find the document token, prompting as a last resort."""
        from gendocs.infrastructure.project_files import ProjectFileError, find_token

        try:
            token = find_token(self.settings.project_root, explicit)
        except ProjectFileError as exc:
            raise click.ClickException(str(exc)) from exc
        if token:
            return token
        if not self.interactive:
            raise click.UsageError(
                "We couldn't find a token to authenticate you. Provide one with --token, "
                "in a gendocs-token file, or in gendocs.json."
            )
        return self.prompt("Token")

    def progress(self, message: str) -> None:
        """Print a human-facing progress line; suppressed for --json/--quiet."""
        if self.human_output:
            click.echo(message)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, warnings to stderr.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

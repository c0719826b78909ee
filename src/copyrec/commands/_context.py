"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the codec service and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from copyrec.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from copyrec.config.settings import CopyrecSettings
    from copyrec.services.codec import CodecService
    from copyrec.services.result import ServiceResult

STDIN_PATH = Path("-")


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.
    """

    def __init__(self, settings: CopyrecSettings) -> None:
        self.settings = settings
        self._service: CodecService | None = None

        # Configure structured logging
        from copyrec.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> CodecService:
        """The codec service (created lazily on first access)."""
        if self._service is None:
            from copyrec.services.codec import CodecService

            self._service = CodecService(self.settings)
        return self._service

    def read_input(self, path: Path) -> list[str]:
        """Read record lines from *path*, or stdin when *path* is ``-``."""
        from copyrec.infrastructure.records import iter_lines, read_lines

        io = self.settings.io
        if path == STDIN_PATH:
            stream = click.get_text_stream("stdin", encoding=io.encoding)
            return list(iter_lines(stream, skip_blank=io.skip_blank_lines))
        return read_lines(path, encoding=io.encoding, skip_blank=io.skip_blank_lines)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
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
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

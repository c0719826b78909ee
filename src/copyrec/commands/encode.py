"""Command: encode JSON-lines records into fixed-width text."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from copyrec.commands._base import SCHEMA_ARGUMENT, RecCommand

if TYPE_CHECKING:
    from copyrec.commands._context import AppContext


@click.command(
    cls=RecCommand,
    examples="""\
  copyrec encode customer.toml customers.jsonl
  echo '{"id": "ABC123", "count": "42"}' | copyrec -q encode customer.toml
  copyrec encode customer.toml customers.jsonl --output customers.dat""",
)
@SCHEMA_ARGUMENT
@click.argument(
    "input_path",
    metavar="[INPUT]",
    default="-",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write encoded records to a file instead of only reporting them.",
)
@click.pass_obj
def encode(
    app: AppContext, schema_path: Path, input_path: Path, output_path: Path | None
) -> None:
    """Encode JSON-lines records from INPUT (default: stdin) using SCHEMA."""
    from copyrec.infrastructure.records import iter_json_records, write_lines

    lines = app.read_input(input_path)
    result = app.service.encode(schema_path, iter_json_records(lines))
    if result.ok and output_path is not None:
        io = app.settings.io
        write_lines(
            output_path,
            result.data["records"],
            encoding=io.encoding,
            newline=io.newline,
        )
    app.emit(result)

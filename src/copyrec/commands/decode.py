"""Command: decode fixed-width records into structured values."""

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
  copyrec decode customer.toml customers.dat
  cat customers.dat | copyrec --json decode customer.toml
  copyrec -q decode customer.toml customers.dat > customers.jsonl""",
)
@SCHEMA_ARGUMENT
@click.argument(
    "input_path",
    metavar="[INPUT]",
    default="-",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
)
@click.pass_obj
def decode(app: AppContext, schema_path: Path, input_path: Path) -> None:
    """Decode fixed-width lines from INPUT (default: stdin) using SCHEMA."""
    lines = app.read_input(input_path)
    app.emit(app.service.decode(schema_path, lines))

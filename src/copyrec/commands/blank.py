"""Command: print the all-default record of a schema."""

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
  copyrec blank customer.toml
  copyrec -q blank customer.toml > empty.dat""",
)
@SCHEMA_ARGUMENT
@click.pass_obj
def blank(app: AppContext, schema_path: Path) -> None:
    """Print a record of SCHEMA with every field at its default."""
    app.emit(app.service.blank(schema_path))

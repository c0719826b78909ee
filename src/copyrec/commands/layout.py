"""Command: show the resolved field layout of a schema."""

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
  copyrec layout customer.toml
  copyrec --json layout customer.toml""",
)
@SCHEMA_ARGUMENT
@click.pass_obj
def layout(app: AppContext, schema_path: Path) -> None:
    """Show every field's offset range in SCHEMA."""
    app.emit(app.service.layout(schema_path))

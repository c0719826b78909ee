"""Subcommand modules for copyrec.

Provides register_commands() which uses deferred imports to keep
``copyrec --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from copyrec.commands.blank import blank
    from copyrec.commands.decode import decode
    from copyrec.commands.encode import encode
    from copyrec.commands.layout import layout

    cli.add_command(layout)
    cli.add_command(blank)
    cli.add_command(decode)
    cli.add_command(encode)

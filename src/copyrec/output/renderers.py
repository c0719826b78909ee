"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from copyrec.domain.decoder import flatten
from copyrec.domain.resolver import PATH_SEPARATOR
from copyrec.output.console import create_console, get_output, style_for_type

if TYPE_CHECKING:
    from rich.console import Console

    from copyrec.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Encoded records are printed bare, one per line, so the output can be
    redirected straight into a fixed-width file.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "encode":
        return "\n".join(result.data.get("records", []))
    if result.op == "blank":
        return str(result.data.get("record", ""))
    if result.op == "decode":
        return "\n".join(_json.dumps(rec) for rec in result.data.get("records", []))
    if result.op == "layout":
        return "\n".join(
            f"{f['path']} {f['start']} {f['end']}" for f in result.data.get("fields", [])
        )
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="rec.ok")
    op = Text(f"  {result.op}", style="rec.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    console.print(Text(f"  {key}: ", style="rec.key") + Text(str(value)))


def _record_line(console: Console, record: str, *, indent: int = 2) -> None:
    """Print a fixed-width record between bars so padding stays visible."""
    console.print(Text(f"{' ' * indent}|{record}|"), soft_wrap=True)


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="rec.error")
    op = Text(f"  {result.op}", style="rec.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if err and err.detail.get("field"):
        _field(console, "field", err.detail["field"])
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_layout(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "schema", data.get("schema", ""))
    _field(console, "length", data.get("length", 0))
    if data.get("base_offset"):
        _field(console, "base_offset", data["base_offset"])

    fields = data.get("fields", [])
    if not fields:
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="rec.path", no_wrap=True)
    table.add_column("Type")
    table.add_column("Picture")
    table.add_column("Start", style="rec.offset", justify="right")
    table.add_column("End", style="rec.offset", justify="right")
    table.add_column("Length", justify="right")
    for f in fields:
        table.add_row(
            f["path"],
            Text(f["type"], style=style_for_type(f["type"])),
            f["picture"],
            str(f["start"]),
            str(f["end"]),
            str(f["length"]),
        )
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_decode(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "schema", data.get("schema", ""))
    _field(console, "count", data.get("count", 0))
    for number, record in enumerate(data.get("records", []), start=1):
        console.print()
        console.print(Text(f"  record {number}", style="rec.op"))
        for path, value in flatten(record).items():
            key = Text(f"    {PATH_SEPARATOR.join(path)}: ", style="rec.key")
            console.print(key + Text(f"|{value}|"), soft_wrap=True)
    if verbose:
        _render_meta(console, result)


def _render_encode(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "schema", data.get("schema", ""))
    _field(console, "count", data.get("count", 0))
    _field(console, "length", data.get("length", 0))
    for record in data.get("records", []):
        _record_line(console, record)
    if verbose:
        _render_meta(console, result)


def _render_blank(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "schema", data.get("schema", ""))
    _record_line(console, data.get("record", ""))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "layout": _render_layout,
    "decode": _render_decode,
    "encode": _render_encode,
    "blank": _render_blank,
}

"""Decoder: fixed-width text to a structured value tree.

The schema is resolved once; every resolved leaf's exact substring is then
stored in a nested dict that mirrors the schema. Values stay raw
fixed-width strings unless the caller passes an explicit ``convert`` hook.

INVARIANT: A leaf whose range falls outside the record is a
:class:`ParseError` naming the leaf, its range, and the record length.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, NamedTuple

from copyrec.domain.defaults import blank_record
from copyrec.domain.errors import ParseError
from copyrec.domain.resolver import PATH_SEPARATOR, ResolvedField, resolve
from copyrec.domain.schema import SchemaNode

Converter = Callable[[ResolvedField, str], Any]


class DecodeResult(NamedTuple):
    """Decoded value tree and the number of characters it consumed."""

    values: dict[str, Any]
    consumed: int


def decode(
    record: str | None,
    schema: SchemaNode,
    base_offset: int = 0,
    *,
    convert: Converter | None = None,
    strict: bool = False,
) -> DecodeResult:
    """Decode *record* against *schema* starting at *base_offset*.

    Args:
        record: The flat record text.
        schema: Root schema node.
        base_offset: Index of the schema's first character in *record*.
        convert: Optional per-leaf coercion ``(field, raw) -> value``.
        strict: Reject records carrying characters past the schema's end.

    Raises:
        ParseError: The record is missing, too short, or (when *strict*)
            longer than the schema.
    """
    if record is None:
        raise ParseError("Record cannot be None", detail={"record_length": None})

    layout = resolve(schema, base_offset)
    record_length = len(record)

    if not record and layout.fields:
        first = layout.fields[0]
        msg = f"Record is empty; field {first.dotted} requires [{first.start},{first.end})"
        raise ParseError(msg, field=first.dotted, detail=_range_detail(first, record_length))

    values = blank_record(schema)
    for resolved in layout.fields:
        if not 0 <= resolved.start < resolved.end <= record_length:
            msg = (
                f"Invalid position range for field {resolved.dotted}: "
                f"[{resolved.start},{resolved.end}) with record length {record_length}"
            )
            raise ParseError(msg, field=resolved.dotted, detail=_range_detail(resolved, record_length))
        raw = record[resolved.start : resolved.end]
        _assign(values, resolved.path, convert(resolved, raw) if convert else raw)

    if strict and record_length != layout.end:
        msg = (
            f"Record length {record_length} does not match schema end offset {layout.end}"
        )
        raise ParseError(
            msg,
            detail={"record_length": record_length, "expected_length": layout.end},
        )

    return DecodeResult(values=values, consumed=layout.total_length)


def _range_detail(resolved: ResolvedField, record_length: int) -> dict[str, Any]:
    return {
        "start": resolved.start,
        "end": resolved.end,
        "record_length": record_length,
    }


def _assign(tree: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    node = tree
    for name in path[:-1]:
        node = node[name]
    node[path[-1]] = value


def flatten(values: Mapping[str, Any]) -> dict[tuple[str, ...], Any]:
    """Convert a nested value tree to a path-keyed mapping."""
    out: dict[tuple[str, ...], Any] = {}
    _flatten_into(values, (), out)
    return out


def _flatten_into(
    values: Mapping[str, Any], prefix: tuple[str, ...], out: dict[tuple[str, ...], Any]
) -> None:
    for key, value in values.items():
        path = (*prefix, key)
        if isinstance(value, Mapping):
            _flatten_into(value, path, out)
        else:
            out[path] = value


def unflatten(mapping: Mapping[str | tuple[str, ...], Any]) -> dict[str, Any]:
    """Convert a path-keyed mapping (tuple or dotted keys) to a nested tree."""
    tree: dict[str, Any] = {}
    for key, value in mapping.items():
        path = tuple(key.split(PATH_SEPARATOR)) if isinstance(key, str) else tuple(key)
        node = tree
        for name in path[:-1]:
            node = node.setdefault(name, {})
        node[path[-1]] = value
    return tree

"""Encoder: structured values to fixed-width text.

Leaves are formatted in schema order and concatenated with no separators.
Formatting rules by type:

- alphanumeric: left-aligned, space-padded. Longer values are truncated
  to the field width (lossy, never an error).
- numeric / signed numeric: digits only, rendered as a zero-filled
  integer. No sign is rendered for signed fields.
- decimal: one optional ``.`` separator; integer and fractional parts
  must fit the field's integer width and scale.

A missing or ``None`` value is written as the field's default unchanged,
so absent fields never fail.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from copyrec.domain.defaults import DECIMAL_SEPARATOR, default_value
from copyrec.domain.errors import FormatError
from copyrec.domain.resolver import PATH_SEPARATOR
from copyrec.domain.schema import FieldDescriptor, LeafField, SchemaNode
from copyrec.domain.types import FieldType

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]*")


def encode(values: Mapping[str, Any] | None, schema: SchemaNode) -> str:
    """Encode a value tree into a record exactly as wide as *schema*.

    Raises:
        FormatError: A value is non-numeric where digits are required,
            exceeds its field's capacity, or a group value is not a mapping.
    """
    if values is None:
        values = {}
    if not isinstance(values, Mapping):
        msg = f"Record values must be a mapping, got {type(values).__name__}"
        raise FormatError(msg, detail={"value_type": type(values).__name__})

    parts: list[str] = []
    if isinstance(schema, LeafField):
        _encode_node(schema, values.get(schema.name), (), parts)
    else:
        _encode_group_children(schema.children, values, (), parts)
    return "".join(parts)


def _encode_group_children(
    children: tuple[SchemaNode, ...],
    values: Mapping[str, Any],
    prefix: tuple[str, ...],
    parts: list[str],
) -> None:
    known = {child.name for child in children}
    unknown = [key for key in values if key not in known]
    if unknown:
        logger.debug(
            "Ignoring values with no matching field under %s: %s",
            PATH_SEPARATOR.join(prefix) or "<root>",
            ", ".join(sorted(map(str, unknown))),
        )
    for child in children:
        _encode_node(child, values.get(child.name), prefix, parts)


def _encode_node(
    node: SchemaNode, value: Any, prefix: tuple[str, ...], parts: list[str]
) -> None:
    path = (*prefix, node.name)
    if isinstance(node, LeafField):
        parts.append(format_value(value, node.descriptor, path=PATH_SEPARATOR.join(path)))
        return
    if value is None:
        value = {}
    if not isinstance(value, Mapping):
        dotted = PATH_SEPARATOR.join(path)
        msg = f"Group {dotted} expects a mapping, got {type(value).__name__}"
        raise FormatError(msg, field=dotted, detail={"value_type": type(value).__name__})
    _encode_group_children(node.children, value, path, parts)


def format_value(value: Any, descriptor: FieldDescriptor, *, path: str | None = None) -> str:
    """Render one value into exactly ``descriptor.length`` characters."""
    if value is None:
        return default_value(descriptor)
    text = value if isinstance(value, str) else str(value)
    field_path = path or descriptor.name
    formatter = _FORMATTERS.get(descriptor.type, _format_alphanumeric)
    return formatter(text, descriptor, field_path)


def _format_alphanumeric(text: str, descriptor: FieldDescriptor, path: str) -> str:
    length = descriptor.length
    if len(text) > length:
        logger.debug("Truncating %s from %d to %d characters", path, len(text), length)
        return text[:length]
    return text.ljust(length)


def _format_numeric(text: str, descriptor: FieldDescriptor, path: str) -> str:
    length = descriptor.length
    if not _DIGITS.fullmatch(text):
        msg = f"Field {path} value '{text}' contains non-numeric characters"
        raise FormatError(msg, field=path, detail=_value_detail(text, descriptor))
    rendered = text.lstrip("0") or "0"
    if len(rendered) > length:
        msg = f"Field {path} numeric value '{text}' exceeds field length of {length}"
        raise FormatError(msg, field=path, detail=_value_detail(text, descriptor))
    return rendered.rjust(length, "0")


def _format_decimal(text: str, descriptor: FieldDescriptor, path: str) -> str:
    length = descriptor.length
    scale = descriptor.scale
    integer_part, _, fraction_part = text.partition(DECIMAL_SEPARATOR)
    if not _DIGITS.fullmatch(integer_part + fraction_part):
        msg = f"Field {path} value '{text}' contains invalid characters for a decimal"
        raise FormatError(msg, field=path, detail=_value_detail(text, descriptor))

    integer_digits = integer_part.lstrip("0")
    max_integer = descriptor.integer_digits
    if len(integer_digits) > max_integer or len(fraction_part) > scale:
        msg = (
            f"Field {path} decimal value '{text}' exceeds field specification "
            f"of length {length} with scale {scale}"
        )
        raise FormatError(msg, field=path, detail=_value_detail(text, descriptor))

    if scale > 0:
        return (
            integer_digits.rjust(max_integer, "0")
            + DECIMAL_SEPARATOR
            + fraction_part.ljust(scale, "0")
        )
    return integer_digits.rjust(length, "0")


def _value_detail(text: str, descriptor: FieldDescriptor) -> dict[str, Any]:
    return {
        "value": text,
        "type": str(descriptor.type),
        "length": descriptor.length,
        "scale": descriptor.scale,
    }


_FORMATTERS = {
    FieldType.ALPHANUMERIC: _format_alphanumeric,
    FieldType.NUMERIC: _format_numeric,
    # TODO: reserve a sign position for SIGNED_NUMERIC once the trailing
    # overpunch vs. leading sign character convention is settled.
    FieldType.SIGNED_NUMERIC: _format_numeric,
    FieldType.DECIMAL: _format_decimal,
}

"""Default ("blank") values per field type.

Every default is exactly ``descriptor.length`` characters wide:

- alphanumeric: spaces
- numeric / signed numeric: zeros
- decimal with a scale: zeros with an embedded separator, e.g.
  ``0000.00`` for length 7 scale 2. When the layout leaves no room for
  an integer digit the default degrades to plain zeros.
"""

from __future__ import annotations

from typing import Any

from copyrec.domain.schema import FieldDescriptor, LeafField, SchemaNode
from copyrec.domain.types import FieldType

DECIMAL_SEPARATOR = "."


def default_value(descriptor: FieldDescriptor) -> str:
    """Return the type-correct blank value for *descriptor*."""
    length = descriptor.length
    if descriptor.type in (FieldType.NUMERIC, FieldType.SIGNED_NUMERIC):
        return "0" * length
    if descriptor.type is FieldType.DECIMAL:
        scale = descriptor.scale
        integer_digits = length - scale - 1
        if scale > 0 and integer_digits > 0:
            return "0" * integer_digits + DECIMAL_SEPARATOR + "0" * scale
        return "0" * length
    return " " * length


def blank_record(schema: SchemaNode) -> dict[str, Any]:
    """Build a fully-shaped value tree holding every leaf's default.

    Groups become nested dicts; a bare leaf schema yields a one-key dict.
    """
    if isinstance(schema, LeafField):
        return {schema.name: default_value(schema.descriptor)}
    return {child.name: _blank_node(child) for child in schema.children}


def _blank_node(node: SchemaNode) -> Any:
    if isinstance(node, LeafField):
        return default_value(node.descriptor)
    return {child.name: _blank_node(child) for child in node.children}

"""Domain layer — field types, schema trees, and the record codec.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""

from copyrec.domain.codec import RecordCodec
from copyrec.domain.decoder import DecodeResult, decode, flatten, unflatten
from copyrec.domain.defaults import blank_record, default_value
from copyrec.domain.encoder import encode, format_value
from copyrec.domain.errors import CopyrecError, FormatError, ParseError, SchemaError
from copyrec.domain.resolver import ResolvedField, ResolvedLayout, find_field, resolve
from copyrec.domain.schema import (
    FieldDescriptor,
    LeafField,
    NestedGroup,
    SchemaBuilder,
    SchemaNode,
    leaf_count,
    schema_length,
)
from copyrec.domain.types import FieldType

__all__ = [
    "CopyrecError",
    "DecodeResult",
    "FieldDescriptor",
    "FieldType",
    "FormatError",
    "LeafField",
    "NestedGroup",
    "ParseError",
    "RecordCodec",
    "ResolvedField",
    "ResolvedLayout",
    "SchemaBuilder",
    "SchemaError",
    "SchemaNode",
    "blank_record",
    "decode",
    "default_value",
    "encode",
    "find_field",
    "flatten",
    "format_value",
    "leaf_count",
    "resolve",
    "schema_length",
    "unflatten",
]

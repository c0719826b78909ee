"""Schema documents — TOML or JSON files declaring a record layout.

A document is a named root with an ordered ``fields`` list. An entry
carrying its own ``fields`` list is a nested group; any other entry is a
leaf and needs ``type`` and ``length``::

    name = "customer"

    [[fields]]
    name = "id"
    type = "alphanumeric"
    length = 10

    [[fields]]
    name = "address"

    [[fields.fields]]
    name = "street"
    type = "PIC X"
    length = 20

The document is validated with pydantic, then converted into the
immutable :mod:`copyrec.domain.schema` tree. Every failure surfaces as a
:class:`SchemaError`.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from copyrec.domain.errors import SchemaError
from copyrec.domain.schema import FieldDescriptor, LeafField, NestedGroup, SchemaNode
from copyrec.domain.types import FieldType


class FieldSpec(BaseModel):
    """One entry of a schema document: a leaf or a nested group."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    type: str | None = None
    length: int | None = None
    scale: int = 0
    description: str = ""
    fields: list[FieldSpec] | None = None

    def to_node(self) -> SchemaNode:
        if self.fields is not None:
            if self.type is not None or self.length is not None:
                msg = f"Group '{self.name}' cannot declare a type or length"
                raise SchemaError(msg, field=self.name)
            return NestedGroup(self.name, tuple(spec.to_node() for spec in self.fields))
        if self.type is None or self.length is None:
            msg = f"Field '{self.name}' needs both a type and a length"
            raise SchemaError(msg, field=self.name)
        return LeafField(
            FieldDescriptor(
                name=self.name,
                type=FieldType.parse(self.type),
                length=self.length,
                scale=self.scale,
                description=self.description,
            )
        )


FieldSpec.model_rebuild()


class SchemaDocument(BaseModel):
    """Root of a schema document."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    description: str = ""
    fields: list[FieldSpec]

    def to_schema(self) -> NestedGroup:
        return NestedGroup(self.name, tuple(spec.to_node() for spec in self.fields))


def parse_schema(data: dict[str, Any]) -> NestedGroup:
    """Validate a schema document dict and build its schema tree."""
    try:
        document = SchemaDocument.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid schema document: {exc.error_count()} validation error(s)"
        raise SchemaError(msg, detail={"errors": _error_summary(exc)}) from exc
    return document.to_schema()


def load_schema(path: Path) -> NestedGroup:
    """Read a ``.toml`` or ``.json`` schema document from *path*."""
    path = Path(path)
    if not path.is_file():
        msg = f"Schema file not found: {path}"
        raise SchemaError(msg, detail={"path": str(path)})

    raw = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            data = json.loads(raw)
        elif suffix == ".toml":
            data = tomllib.loads(raw)
        else:
            msg = f"Unsupported schema file type: {path.suffix or '<none>'}"
            raise SchemaError(msg, detail={"path": str(path)})
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot parse schema file {path}: {exc}"
        raise SchemaError(msg, detail={"path": str(path)}) from exc

    if not isinstance(data, dict):
        msg = f"Schema file {path} must contain an object at the top level"
        raise SchemaError(msg, detail={"path": str(path)})
    return parse_schema(data)


def dump_schema(schema: NestedGroup) -> dict[str, Any]:
    """Inverse of :func:`parse_schema`."""
    return {"name": schema.name, "fields": [_dump_node(child) for child in schema.children]}


def _dump_node(node: SchemaNode) -> dict[str, Any]:
    if isinstance(node, NestedGroup):
        return {"name": node.name, "fields": [_dump_node(child) for child in node.children]}
    descriptor = node.descriptor
    out: dict[str, Any] = {
        "name": descriptor.name,
        "type": descriptor.type.value,
        "length": descriptor.length,
    }
    if descriptor.scale:
        out["scale"] = descriptor.scale
    if descriptor.description:
        out["description"] = descriptor.description
    return out


def _error_summary(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    ]

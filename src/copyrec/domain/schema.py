"""Field descriptors and schema trees.

A schema is a tree of :data:`SchemaNode` values. Leaves are the only nodes
that consume characters; groups only aggregate their children. Declaration
order is the layout order and is fixed once the tree is built.

INVARIANT: Every node is immutable and hashable, so resolved layouts can
be cached per ``(schema, base_offset)``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from copyrec.domain.errors import SchemaError
from copyrec.domain.types import FieldType


@dataclass(frozen=True)
class FieldDescriptor:
    """Type, width, and scale of one leaf field.

    Attributes:
        name: Identifier used in paths and error messages.
        type: The field's :class:`FieldType`.
        length: Total character width, separator included for decimals.
        scale: Fractional digits. Only meaningful for decimal fields.
        description: Free-form documentation, ignored by the codec.
    """

    name: str
    type: FieldType
    length: int
    scale: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise SchemaError("Field name must not be empty")
        if not isinstance(self.type, FieldType):
            object.__setattr__(self, "type", FieldType.parse(self.type))
        detail = {"length": self.length, "scale": self.scale, "type": str(self.type)}
        if isinstance(self.length, bool) or not isinstance(self.length, int) or self.length <= 0:
            msg = f"Field '{self.name}' must have a positive length, got {self.length!r}"
            raise SchemaError(msg, field=self.name, detail=detail)
        if isinstance(self.scale, bool) or not isinstance(self.scale, int) or self.scale < 0:
            msg = f"Field '{self.name}' must have a non-negative scale, got {self.scale!r}"
            raise SchemaError(msg, field=self.name, detail=detail)
        if self.type is FieldType.DECIMAL:
            if self.scale >= self.length:
                msg = (
                    f"Decimal field '{self.name}' scale {self.scale} "
                    f"must be less than its length {self.length}"
                )
                raise SchemaError(msg, field=self.name, detail=detail)
        elif self.scale:
            msg = f"Field '{self.name}' of type {self.type} cannot declare a scale"
            raise SchemaError(msg, field=self.name, detail=detail)

    @property
    def integer_digits(self) -> int:
        """Widest integer part a value may render with."""
        return self.length - self.scale - (1 if self.scale > 0 else 0)

    @property
    def picture(self) -> str:
        """Copybook-style picture clause, e.g. ``PIC 9(4).9(2)``."""
        if self.type is FieldType.ALPHANUMERIC:
            return f"PIC X({self.length})"
        if self.type is FieldType.NUMERIC:
            return f"PIC 9({self.length})"
        if self.type is FieldType.SIGNED_NUMERIC:
            return f"PIC S9({self.length})"
        if self.scale == 0:
            return f"PIC 9({self.length})"
        return f"PIC 9({self.integer_digits}).9({self.scale})"


@dataclass(frozen=True)
class LeafField:
    """A schema node that consumes ``descriptor.length`` characters."""

    descriptor: FieldDescriptor

    @property
    def name(self) -> str:
        return self.descriptor.name


@dataclass(frozen=True)
class NestedGroup:
    """A named, ordered aggregate of child nodes.

    A group contributes no characters of its own; its length is the sum
    of its leaves' lengths.
    """

    name: str
    children: tuple[SchemaNode, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise SchemaError("Group name must not be empty")
        children = tuple(self.children)
        seen: set[str] = set()
        for child in children:
            if not isinstance(child, (LeafField, NestedGroup)):
                msg = f"Group '{self.name}' contains a non-schema node: {child!r}"
                raise SchemaError(msg, field=self.name)
            if child.name in seen:
                msg = f"Group '{self.name}' declares '{child.name}' more than once"
                raise SchemaError(msg, field=self.name, detail={"duplicate": child.name})
            seen.add(child.name)
        object.__setattr__(self, "children", children)

    def child(self, name: str) -> SchemaNode:
        for node in self.children:
            if node.name == name:
                return node
        raise KeyError(name)


SchemaNode = LeafField | NestedGroup


def iter_leaves(node: SchemaNode) -> Iterator[LeafField]:
    """Yield leaves depth-first in declaration order."""
    if isinstance(node, LeafField):
        yield node
        return
    for child in node.children:
        yield from iter_leaves(child)


def leaf_count(node: SchemaNode) -> int:
    return sum(1 for _ in iter_leaves(node))


def schema_length(node: SchemaNode) -> int:
    """Total record width: the sum of all leaf lengths."""
    return sum(leaf.descriptor.length for leaf in iter_leaves(node))


class SchemaBuilder:
    """Declarative construction of a :class:`NestedGroup`.

    Usage::

        schema = (
            SchemaBuilder("customer")
            .alphanumeric("id", 10)
            .numeric("count", 5)
            .group("address", SchemaBuilder("address")
                   .alphanumeric("street", 20)
                   .alphanumeric("city", 10))
            .build()
        )
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._nodes: list[SchemaNode] = []

    def field(self, descriptor: FieldDescriptor) -> SchemaBuilder:
        self._nodes.append(LeafField(descriptor))
        return self

    def alphanumeric(self, name: str, length: int, *, description: str = "") -> SchemaBuilder:
        return self.field(FieldDescriptor(name, FieldType.ALPHANUMERIC, length, description=description))

    def numeric(self, name: str, length: int, *, description: str = "") -> SchemaBuilder:
        return self.field(FieldDescriptor(name, FieldType.NUMERIC, length, description=description))

    def signed_numeric(self, name: str, length: int, *, description: str = "") -> SchemaBuilder:
        return self.field(
            FieldDescriptor(name, FieldType.SIGNED_NUMERIC, length, description=description)
        )

    def decimal(
        self, name: str, length: int, scale: int = 0, *, description: str = ""
    ) -> SchemaBuilder:
        return self.field(
            FieldDescriptor(name, FieldType.DECIMAL, length, scale, description=description)
        )

    def group(
        self, name: str, children: SchemaBuilder | NestedGroup | Iterable[SchemaNode]
    ) -> SchemaBuilder:
        """Append a nested group built from a builder, a group, or plain nodes.

        The appended group always takes *name*, whatever the source was called.
        """
        if isinstance(children, SchemaBuilder):
            nodes = tuple(children._nodes)
        elif isinstance(children, NestedGroup):
            nodes = children.children
        else:
            nodes = tuple(children)
        self._nodes.append(NestedGroup(name, nodes))
        return self

    def build(self) -> NestedGroup:
        return NestedGroup(self.name, tuple(self._nodes))

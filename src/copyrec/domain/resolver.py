"""Schema resolution: absolute offsets by depth-first traversal.

Offsets are a strict left-to-right prefix sum over leaves in declaration
order. A nested group is resolved at the current cursor and advances the
cursor by the sum of its leaves' lengths.

Resolution is pure, so results are cached per ``(schema, base_offset)``.
The cache computes once and then only hands out immutable layouts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from copyrec.domain.errors import SchemaError
from copyrec.domain.schema import FieldDescriptor, LeafField, NestedGroup, SchemaNode

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "."


@dataclass(frozen=True)
class ResolvedField:
    """A leaf descriptor pinned to its ``[start, end)`` character range."""

    path: tuple[str, ...]
    descriptor: FieldDescriptor
    start: int
    end: int

    @property
    def dotted(self) -> str:
        return PATH_SEPARATOR.join(self.path)

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ResolvedLayout:
    """Ordered resolved leaves plus the total width they cover."""

    fields: tuple[ResolvedField, ...]
    base_offset: int
    total_length: int

    @property
    def end(self) -> int:
        return self.base_offset + self.total_length

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


def resolve(schema: SchemaNode, base_offset: int = 0) -> ResolvedLayout:
    """Flatten *schema* into resolved leaves starting at *base_offset*.

    The root node's own name is not part of any path: a root group's
    children are addressed directly, and a bare leaf is addressed by its
    own name.
    """
    if isinstance(base_offset, bool) or not isinstance(base_offset, int) or base_offset < 0:
        msg = f"Base offset must be a non-negative integer, got {base_offset!r}"
        raise SchemaError(msg, detail={"base_offset": base_offset})
    if not isinstance(schema, (LeafField, NestedGroup)):
        msg = f"Cannot resolve a non-schema value: {schema!r}"
        raise SchemaError(msg)
    return _resolve_cached(schema, base_offset)


@lru_cache(maxsize=256)
def _resolve_cached(schema: SchemaNode, base_offset: int) -> ResolvedLayout:
    logger.debug("Resolving layout for %s at offset %d", schema.name, base_offset)
    out: list[ResolvedField] = []
    if isinstance(schema, LeafField):
        cursor = _resolve_node(schema, base_offset, (), out)
    else:
        cursor = base_offset
        for child in schema.children:
            cursor = _resolve_node(child, cursor, (), out)
    return ResolvedLayout(
        fields=tuple(out),
        base_offset=base_offset,
        total_length=cursor - base_offset,
    )


def _resolve_node(
    node: SchemaNode,
    cursor: int,
    prefix: tuple[str, ...],
    out: list[ResolvedField],
) -> int:
    """Append resolved leaves under *node* to *out*; return the new cursor."""
    path = (*prefix, node.name)
    if isinstance(node, LeafField):
        end = cursor + node.descriptor.length
        out.append(ResolvedField(path=path, descriptor=node.descriptor, start=cursor, end=end))
        return end
    for child in node.children:
        cursor = _resolve_node(child, cursor, path, out)
    return cursor


def find_field(layout: ResolvedLayout, path: str | tuple[str, ...]) -> ResolvedField:
    """Look up a resolved leaf by dotted or tuple path.

    Raises:
        KeyError: No leaf lives at *path*.
    """
    key = tuple(path.split(PATH_SEPARATOR)) if isinstance(path, str) else tuple(path)
    for resolved in layout.fields:
        if resolved.path == key:
            return resolved
    raise KeyError(PATH_SEPARATOR.join(key))


def clear_cache() -> None:
    """Drop every cached layout."""
    _resolve_cached.cache_clear()

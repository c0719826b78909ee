"""Tests for default value generation."""

import pytest

from copyrec.domain.defaults import blank_record, default_value
from copyrec.domain.schema import FieldDescriptor, LeafField, NestedGroup
from copyrec.domain.types import FieldType


@pytest.mark.parametrize(
    "descriptor,expected",
    [
        (FieldDescriptor("a", FieldType.ALPHANUMERIC, 4), "    "),
        (FieldDescriptor("n", FieldType.NUMERIC, 5), "00000"),
        (FieldDescriptor("s", FieldType.SIGNED_NUMERIC, 3), "000"),
        (FieldDescriptor("d", FieldType.DECIMAL, 7, 2), "0000.00"),
        (FieldDescriptor("d", FieldType.DECIMAL, 4, 0), "0000"),
        (FieldDescriptor("d", FieldType.DECIMAL, 3, 1), "0.0"),
        # No room for an integer digit: degrade to plain zeros.
        (FieldDescriptor("d", FieldType.DECIMAL, 3, 2), "000"),
    ],
)
def test_default_value(descriptor: FieldDescriptor, expected: str) -> None:
    value = default_value(descriptor)
    assert value == expected
    assert len(value) == descriptor.length


class TestBlankRecord:
    def test_shapes_nested_tree(self, customer_schema: NestedGroup) -> None:
        assert blank_record(customer_schema) == {
            "id": " " * 10,
            "count": "00000",
            "address": {"street": " " * 20, "city": " " * 10},
        }

    def test_leaf_root(self) -> None:
        leaf = LeafField(FieldDescriptor("n", FieldType.NUMERIC, 2))
        assert blank_record(leaf) == {"n": "00"}

    def test_returns_fresh_tree_each_call(self, customer_schema: NestedGroup) -> None:
        first = blank_record(customer_schema)
        first["address"]["city"] = "changed"
        assert blank_record(customer_schema)["address"]["city"] == " " * 10

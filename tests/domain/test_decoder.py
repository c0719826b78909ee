"""Tests for decoding fixed-width records."""

from decimal import Decimal

import pytest

from copyrec.domain.decoder import decode, flatten, unflatten
from copyrec.domain.errors import ParseError
from copyrec.domain.resolver import ResolvedField
from copyrec.domain.schema import FieldDescriptor, LeafField, NestedGroup, SchemaBuilder
from copyrec.domain.types import FieldType
from tests.conftest import CUSTOMER_RECORD


class TestDecode:
    def test_extracts_raw_values(self, customer_schema: NestedGroup) -> None:
        record = "ABC123    12345Main Street         New York  "
        result = decode(record, customer_schema)
        assert result.values == {
            "id": "ABC123    ",
            "count": "12345",
            "address": {"street": "Main Street         ", "city": "New York  "},
        }
        assert result.consumed == 45

    def test_values_stay_fixed_width_strings(self, customer_schema: NestedGroup) -> None:
        result = decode(CUSTOMER_RECORD, customer_schema)
        assert result.values["count"] == "00042"

    def test_base_offset(self, customer_schema: NestedGroup) -> None:
        result = decode("HDR" + CUSTOMER_RECORD, customer_schema, 3)
        assert result.values["id"] == "ABC123    "
        assert result.values["address"]["city"] == "New York  "
        assert result.consumed == 45

    def test_trailing_data_ignored_by_default(self, customer_schema: NestedGroup) -> None:
        result = decode(CUSTOMER_RECORD + "EXTRA", customer_schema)
        assert result.consumed == 45

    def test_strict_rejects_trailing_data(self, customer_schema: NestedGroup) -> None:
        with pytest.raises(ParseError, match="does not match") as exc_info:
            decode(CUSTOMER_RECORD + "X", customer_schema, strict=True)
        assert exc_info.value.detail["expected_length"] == 45

    def test_strict_accepts_exact_length(self, customer_schema: NestedGroup) -> None:
        assert decode(CUSTOMER_RECORD, customer_schema, strict=True).consumed == 45

    def test_leaf_root(self) -> None:
        leaf = LeafField(FieldDescriptor("n", FieldType.NUMERIC, 3))
        assert decode("007", leaf).values == {"n": "007"}

    def test_empty_schema_accepts_empty_record(self) -> None:
        result = decode("", NestedGroup("nothing", ()))
        assert result.values == {}
        assert result.consumed == 0

    def test_convert_hook(self) -> None:
        schema = SchemaBuilder("r").numeric("n", 3).decimal("d", 6, 2).build()

        def convert(field: ResolvedField, raw: str) -> object:
            if field.descriptor.type is FieldType.DECIMAL:
                return Decimal(raw)
            return int(raw)

        result = decode("042012.50", schema, convert=convert)
        assert result.values == {"n": 42, "d": Decimal("12.50")}


class TestDecodeErrors:
    def test_none_record(self, customer_schema: NestedGroup) -> None:
        with pytest.raises(ParseError, match="cannot be None"):
            decode(None, customer_schema)

    def test_empty_record_names_first_field(self, customer_schema: NestedGroup) -> None:
        with pytest.raises(ParseError) as exc_info:
            decode("", customer_schema)
        assert exc_info.value.field == "id"

    def test_short_record_names_first_field(self, customer_schema: NestedGroup) -> None:
        with pytest.raises(ParseError) as exc_info:
            decode("ABC123", customer_schema)
        err = exc_info.value
        assert err.field == "id"
        assert err.detail == {"start": 0, "end": 10, "record_length": 6}
        assert "[0,10)" in str(err)
        assert "record length 6" in str(err)

    def test_truncated_nested_field(self, customer_schema: NestedGroup) -> None:
        with pytest.raises(ParseError) as exc_info:
            decode(CUSTOMER_RECORD[:40], customer_schema)
        assert exc_info.value.field == "address.city"
        assert exc_info.value.detail["record_length"] == 40

    def test_offset_past_record(self, customer_schema: NestedGroup) -> None:
        with pytest.raises(ParseError) as exc_info:
            decode(CUSTOMER_RECORD, customer_schema, 1)
        assert exc_info.value.field == "address.city"

    def test_error_code(self, customer_schema: NestedGroup) -> None:
        with pytest.raises(ParseError) as exc_info:
            decode("x", customer_schema)
        assert exc_info.value.code == "PARSE_ERROR"


class TestFlatten:
    def test_flatten(self) -> None:
        tree = {"id": "A", "address": {"street": "S", "geo": {"lat": "1"}}}
        assert flatten(tree) == {
            ("id",): "A",
            ("address", "street"): "S",
            ("address", "geo", "lat"): "1",
        }

    def test_unflatten_tuple_and_dotted_keys(self) -> None:
        mapping = {("id",): "A", "address.street": "S", ("address", "city"): "C"}
        assert unflatten(mapping) == {"id": "A", "address": {"street": "S", "city": "C"}}

    def test_inverse(self, customer_schema: NestedGroup) -> None:
        values = decode(CUSTOMER_RECORD, customer_schema).values
        assert unflatten(flatten(values)) == values

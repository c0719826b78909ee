"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from copyrec.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="decode", data={"count": 1})
        assert result.ok is True
        assert result.op == "decode"
        assert result.data == {"count": 1}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("encode", "FORMAT_ERROR", "too wide", field="count")
        assert result.ok is False
        assert result.error == ServiceError(
            code="FORMAT_ERROR", message="too wide", detail={"field": "count"}
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="layout", data={"length": 45}, meta={"fields": 4})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["length"] == 45
        assert parsed["meta"]["fields"] == 4

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

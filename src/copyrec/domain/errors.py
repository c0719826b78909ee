"""Typed failures raised by the codec.

Three kinds, one per phase:

- :class:`SchemaError`: construction time. An invalid descriptor or
  schema tree is rejected before any decode/encode is attempted.
- :class:`ParseError`: decode time. A field's range falls outside the
  record, or the record is missing.
- :class:`FormatError`: encode time. A value fails type validation or
  exceeds its field's capacity.

All three are recoverable by the caller. Parse and format errors are
field-attributed: ``field`` holds the dotted path of the offending leaf.
"""

from __future__ import annotations

from typing import Any


class CopyrecError(Exception):
    """Base class for every error the codec raises."""

    code = "COPYREC_ERROR"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.detail: dict[str, Any] = dict(detail or {})
        self.record_number: int | None = None

    def __str__(self) -> str:
        if self.record_number is not None:
            return f"record {self.record_number}: {self.message}"
        return self.message

    def at_record(self, record_number: int) -> CopyrecError:
        """Tag this error with the 1-based record it was raised for."""
        self.record_number = record_number
        self.detail["record_number"] = record_number
        return self

    def to_detail(self) -> dict[str, Any]:
        """Detail payload including the field path, for service results."""
        detail = dict(self.detail)
        if self.field is not None:
            detail.setdefault("field", self.field)
        return detail


class SchemaError(CopyrecError):
    """Invalid field descriptor or schema tree."""

    code = "SCHEMA_ERROR"


class ParseError(CopyrecError):
    """A record could not be decoded against its schema."""

    code = "PARSE_ERROR"


class FormatError(CopyrecError):
    """A value is incompatible with its field's type or capacity."""

    code = "FORMAT_ERROR"

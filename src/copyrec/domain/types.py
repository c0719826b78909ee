"""Field type classification.

The four field types mirror the COBOL picture clauses a copybook uses.
The type decides padding character, alignment, and validation rules.
"""

from __future__ import annotations

from enum import StrEnum

from copyrec.domain.errors import SchemaError


class FieldType(StrEnum):
    """Closed set of supported leaf field types."""

    ALPHANUMERIC = "alphanumeric"
    NUMERIC = "numeric"
    SIGNED_NUMERIC = "signed_numeric"
    DECIMAL = "decimal"

    @property
    def notation(self) -> str:
        """COBOL picture notation (e.g. ``PIC X``)."""
        return _NOTATIONS[self]

    @property
    def is_numeric(self) -> bool:
        return self is not FieldType.ALPHANUMERIC

    @classmethod
    def parse(cls, text: str) -> FieldType:
        """Resolve a value, member name, or picture notation to a FieldType.

        Matching is case-insensitive and ignores surrounding whitespace.
        Raises :class:`SchemaError` for anything unrecognized.
        """
        key = str(text).strip()
        lowered = key.lower()
        for member in cls:
            if lowered in (member.value, member.name.lower()):
                return member
            if key.upper() == member.notation:
                return member
        msg = f"Unknown field type: {text!r}"
        raise SchemaError(msg, detail={"type": text})


_NOTATIONS: dict[FieldType, str] = {
    FieldType.ALPHANUMERIC: "PIC X",
    FieldType.NUMERIC: "PIC 9",
    FieldType.SIGNED_NUMERIC: "PIC S9",
    FieldType.DECIMAL: "PIC 9.9",
}

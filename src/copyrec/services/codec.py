"""CodecService — schema-file driven layout, blank, decode, and encode.

Each operation loads the schema document, runs the domain codec, and
reports the outcome as a :class:`ServiceResult`. Codec errors become
structured failures carrying the error code, field path, and detail.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from copyrec.domain.codec import RecordCodec
from copyrec.domain.decoder import flatten
from copyrec.domain.errors import CopyrecError
from copyrec.domain.resolver import ResolvedLayout
from copyrec.domain.types import FieldType
from copyrec.infrastructure.schema_file import load_schema
from copyrec.services.result import ServiceResult

if TYPE_CHECKING:
    from copyrec.config.settings import CopyrecSettings

logger = logging.getLogger(__name__)


class CodecService:
    """Run codec operations against schema documents on disk.

    Usage::

        svc = CodecService(settings)
        result = svc.decode(Path("customer.toml"), ["ABC123    00042..."])
    """

    def __init__(self, settings: CopyrecSettings) -> None:
        self._settings = settings

    def _codec(self, schema_path: Path) -> RecordCodec:
        schema = load_schema(schema_path)
        return RecordCodec(schema, strict=self._settings.codec.strict_length)

    def layout(self, schema_path: Path) -> ServiceResult:
        """Describe every leaf's resolved offset range."""
        op = "layout"
        try:
            codec = self._codec(schema_path)
            layout = codec.layout_at(self._settings.codec.base_offset)
        except CopyrecError as exc:
            return _failure(op, exc)

        fields = [
            {
                "path": resolved.dotted,
                "type": resolved.descriptor.type.value,
                "picture": resolved.descriptor.picture,
                "start": resolved.start,
                "end": resolved.end,
                "length": resolved.length,
                "scale": resolved.descriptor.scale,
            }
            for resolved in layout.fields
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "schema": codec.schema.name,
                "base_offset": layout.base_offset,
                "length": layout.total_length,
                "fields": fields,
            },
        )

    def blank(self, schema_path: Path) -> ServiceResult:
        """Produce the all-default record for a schema."""
        op = "blank"
        try:
            codec = self._codec(schema_path)
            values = codec.blank()
            record = codec.encode(values)
        except CopyrecError as exc:
            return _failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"schema": codec.schema.name, "record": record, "values": values},
        )

    def decode(self, schema_path: Path, lines: Iterable[str]) -> ServiceResult:
        """Decode fixed-width lines into value trees."""
        op = "decode"
        base_offset = self._settings.codec.base_offset
        try:
            codec = self._codec(schema_path)
            records = [result.values for result in codec.decode_many(lines, base_offset)]
        except CopyrecError as exc:
            return _failure(op, exc)

        logger.debug("Decoded %d record(s) with %s", len(records), codec.schema.name)
        return ServiceResult(
            ok=True,
            op=op,
            data={"schema": codec.schema.name, "count": len(records), "records": records},
        )

    def encode(self, schema_path: Path, records: Iterable[Mapping[str, Any]]) -> ServiceResult:
        """Encode value trees into fixed-width lines."""
        op = "encode"
        warnings: list[str] = []
        try:
            codec = self._codec(schema_path)
            batch = list(records)
            lines = list(codec.encode_many(batch))
        except CopyrecError as exc:
            return _failure(op, exc)

        for number, values in enumerate(batch, start=1):
            warnings.extend(_truncation_warnings(codec.layout, values, number))
        logger.debug("Encoded %d record(s) with %s", len(lines), codec.schema.name)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "schema": codec.schema.name,
                "count": len(lines),
                "length": codec.length,
                "records": lines,
            },
            warnings=warnings,
        )


def _failure(op: str, exc: CopyrecError) -> ServiceResult:
    logger.debug("%s failed: %s", op, exc)
    return ServiceResult.failure(op, exc.code, str(exc), **exc.to_detail())


def _truncation_warnings(
    layout: ResolvedLayout, values: Mapping[str, Any], number: int
) -> list[str]:
    """Report alphanumeric values that were cut to their field width."""
    by_path = {resolved.path: resolved for resolved in layout.fields}
    warnings: list[str] = []
    for path, value in flatten(values).items():
        resolved = by_path.get(path)
        if resolved is None or value is None:
            continue
        if resolved.descriptor.type is not FieldType.ALPHANUMERIC:
            continue
        text = value if isinstance(value, str) else str(value)
        if len(text) > resolved.length:
            warnings.append(
                f"record {number}: {resolved.dotted} truncated "
                f"from {len(text)} to {resolved.length} characters"
            )
    return warnings

"""RecordCodec — a schema bound to its resolver, decoder, and encoder."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from copyrec.domain.decoder import Converter, DecodeResult, decode
from copyrec.domain.defaults import blank_record
from copyrec.domain.encoder import encode
from copyrec.domain.errors import CopyrecError
from copyrec.domain.resolver import ResolvedLayout, resolve
from copyrec.domain.schema import SchemaNode

logger = logging.getLogger(__name__)


class RecordCodec:
    """Encode and decode records of one schema.

    The codec holds no per-call state, so one instance may be shared
    freely across callers and threads.

    Usage::

        codec = RecordCodec(schema)
        text = codec.encode({"id": "ABC123", "count": "42"})
        values = codec.decode(text).values
    """

    def __init__(
        self,
        schema: SchemaNode,
        *,
        convert: Converter | None = None,
        strict: bool = False,
    ) -> None:
        self.schema = schema
        self.convert = convert
        self.strict = strict
        self._layout = resolve(schema)

    @property
    def layout(self) -> ResolvedLayout:
        return self._layout

    @property
    def length(self) -> int:
        return self._layout.total_length

    def layout_at(self, base_offset: int) -> ResolvedLayout:
        return resolve(self.schema, base_offset)

    def blank(self) -> dict[str, Any]:
        return blank_record(self.schema)

    def decode(self, record: str | None, base_offset: int = 0) -> DecodeResult:
        return decode(
            record,
            self.schema,
            base_offset,
            convert=self.convert,
            strict=self.strict,
        )

    def encode(self, values: Mapping[str, Any] | None) -> str:
        return encode(values, self.schema)

    def decode_many(
        self, records: Iterable[str], base_offset: int = 0
    ) -> Iterator[DecodeResult]:
        """Decode records in order, tagging any failure with its record number."""
        for number, record in enumerate(records, start=1):
            try:
                yield self.decode(record, base_offset)
            except CopyrecError as exc:
                logger.debug("Decode failed at record %d: %s", number, exc.message)
                exc.at_record(number)
                raise

    def encode_many(self, records: Iterable[Mapping[str, Any] | None]) -> Iterator[str]:
        """Encode value trees in order, tagging any failure with its record number."""
        for number, values in enumerate(records, start=1):
            try:
                yield self.encode(values)
            except CopyrecError as exc:
                logger.debug("Encode failed at record %d: %s", number, exc.message)
                exc.at_record(number)
                raise

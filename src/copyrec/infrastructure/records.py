"""Record stream I/O.

Fixed-width records are one per line. Structured records are JSON lines,
one object per line. Line terminators are stripped on read; trailing
spaces are significant and kept.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import IO, Any

from copyrec.domain.errors import FormatError

_TERMINATORS = "\r\n"


def iter_lines(stream: IO[str], *, skip_blank: bool = True) -> Iterator[str]:
    """Yield lines from *stream* without their line terminators."""
    for line in stream:
        text = line.rstrip(_TERMINATORS)
        if skip_blank and not text:
            continue
        yield text


def read_lines(path: Path, *, encoding: str = "utf-8", skip_blank: bool = True) -> list[str]:
    with path.open(encoding=encoding, newline="") as fp:
        return list(iter_lines(fp, skip_blank=skip_blank))


def iter_json_records(lines: Iterable[str]) -> Iterator[dict[str, Any]]:
    """Parse JSON-lines input into value trees.

    A line that is not a JSON object is a :class:`FormatError` tagged with
    its 1-based record number.
    """
    for number, line in enumerate(lines, start=1):
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            msg = f"Invalid JSON: {exc.msg}"
            raise FormatError(msg, detail={"line": line}).at_record(number) from exc
        if not isinstance(data, dict):
            msg = f"Expected a JSON object, got {type(data).__name__}"
            raise FormatError(msg, detail={"line": line}).at_record(number)
        yield data


def write_lines(path: Path, lines: Iterable[str], *, encoding: str = "utf-8", newline: str = "\n") -> int:
    """Write *lines* to *path*, one per line. Returns the number written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding=encoding, newline="") as fp:
        for line in lines:
            fp.write(line)
            fp.write(newline)
            count += 1
    return count

"""
import_engine.csv_parser - Low-level CSV reading and cleaning.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Header whitespace stripping
  • Renaming headers through the column mapping
  • Yielding (line_number, row_dict) pairs, line 1 being the header
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterator, Optional

import config


def prepare_reader(raw: str | bytes, delimiter: str = config.CSV_DELIMITER) -> Optional[csv.DictReader]:
    """
    Accept raw file content (bytes or str), clean it,
    and return a DictReader.  Returns None if content is empty.
    """
    text = _decode(raw)
    if not text or not text.strip():
        return None

    reader = csv.DictReader(io.StringIO(text), delimiter=delimiter)
    if reader.fieldnames is None:
        return None

    # Strip whitespace from every header
    reader.fieldnames = [h.strip() for h in reader.fieldnames]
    return reader


def read_rows(
    path: str | Path,
    header_map: dict[str, str],
    delimiter: str = config.CSV_DELIMITER,
) -> Optional[Iterator[tuple[int, dict[str, str]]]]:
    """
    Open *path* and return an iterator of (row_number, mapped_row).

    Headers found in *header_map* are renamed to their canonical name,
    all others pass through verbatim.  Returns None for an empty file;
    raises UnicodeDecodeError when the file is not UTF-8.
    """
    with open(path, "rb") as fh:
        reader = prepare_reader(fh.read(), delimiter)
    if reader is None:
        return None
    return _iter_mapped(reader, header_map)


def map_row(row: dict, header_map: dict[str, str]) -> dict[str, str]:
    """Rename the keys of one raw row; short rows yield empty strings."""
    mapped: dict[str, str] = {}
    for header, value in row.items():
        if header is None:       # surplus cells without a header
            continue
        mapped[header_map.get(header, header)] = (value or "").strip()
    return mapped


def _iter_mapped(reader: csv.DictReader, header_map: dict[str, str]):
    for row in reader:
        # line_num counts physical lines, including blank ones the reader skips
        yield reader.line_num, map_row(row, header_map)


def _decode(raw: str | bytes) -> str:
    """Strict UTF-8; raises UnicodeDecodeError for any other encoding."""
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode("utf-8")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw

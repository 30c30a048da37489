"""CSV input helpers."""

# Module responsibilities:
# - Provide a thin wrapper around pandas.read_csv that keeps every cell as raw text.
# - Detect the field delimiter (comma, tab, pipe or semicolon) from the header line.
# - Drop rows that carry no data and translate pandas failures into the parse error taxonomy.
# - Emit structured logs for traceability.

from __future__ import annotations

import csv
import io
from typing import List, Optional

import pandas as pd

from productflow.core.errors import EmptyDataset, ParseFailure

from .schema import ParsedTable, Row
from .utils.log import get_logger

logger = get_logger("csv_reader")

CANDIDATE_DELIMITERS = ",\t|;"
DEFAULT_DELIMITER = ","


def _cell_text(value: object) -> str:
    if isinstance(value, str):
        return value
    # Short lines are padded with missing values.
    if value is None or pd.isna(value):
        return ""
    return str(value)


def _is_empty_row(row: Row) -> bool:
    return all(value == "" for value in row.values())


def _build_rows(headers: List[str], frame: pd.DataFrame) -> List[Row]:
    rows: List[Row] = []
    for values in frame.itertuples(index=False, name=None):
        row: Row = {}
        # Duplicate headers collapse onto one key; the last occurrence wins.
        for header, value in zip(headers, values):
            row[header] = _cell_text(value)
        rows.append(row)
    return rows


def _first_line(text: str) -> Optional[str]:
    for line in text.splitlines():
        if line.strip():
            return line
    return None


def _header_width(text: str, delimiter: str) -> int:
    for record in csv.reader(io.StringIO(text), delimiter=delimiter):
        if len(record) > 1 or (record and record[0].strip()):
            return len(record)
    return 0


def detect_delimiter(text: str) -> str:
    """Guess the field delimiter from the first non-blank line.

    Only comma, tab, pipe and semicolon are considered. A header line that
    contains none of them (a single column) falls back to a comma.
    """

    line = _first_line(text)
    if line is None:
        return DEFAULT_DELIMITER
    try:
        return csv.Sniffer().sniff(line, delimiters=CANDIDATE_DELIMITERS).delimiter
    except csv.Error:
        return DEFAULT_DELIMITER


def _read_frame(text: str, delimiter: str, **kwargs) -> pd.DataFrame:
    return pd.read_csv(
        io.StringIO(text),
        sep=delimiter,
        header=None,
        dtype=object,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
        **kwargs,
    )


def read_rows(data: bytes, *, encoding: str = "utf-8-sig", source_name: str = "-") -> ParsedTable:
    """Parse CSV bytes into headers plus rows of ``header -> text``.

    Rows with more cells than the header row keep their leading cells and
    drop the extras; the rest of the file still loads.

    Args:
        data: Raw file content.
        encoding: Text encoding; the default strips a UTF-8 byte order mark.
        source_name: Uploaded file name, recorded on every log line.

    Returns:
        ParsedTable with the header row and every non-empty data row.

    Raises:
        EmptyDataset: When there is no header row or no row with data.
        ParseFailure: When the content cannot be decoded or tokenized.
    """

    logger.info("Parsing CSV payload", extra={"bytes": len(data), "source_file": source_name})

    try:
        text = data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        logger.error(
            "Failed to decode CSV payload",
            extra={"error": str(exc), "encoding": encoding, "source_file": source_name},
        )
        raise ParseFailure(f"Error parsing CSV: {exc}") from exc

    delimiter = detect_delimiter(text)
    trimmed: List[int] = []

    try:
        width = _header_width(text, delimiter)

        def _drop_extra_cells(cells: List[str]) -> List[str]:
            trimmed.append(len(cells) - width)
            return cells[:width]

        frame = _read_frame(text, delimiter, on_bad_lines=_drop_extra_cells)
    except pd.errors.EmptyDataError as exc:
        logger.error("CSV payload is empty", extra={"error": str(exc), "source_file": source_name})
        raise EmptyDataset("Could not parse CSV or CSV is empty/invalid.") from exc
    except (pd.errors.ParserError, csv.Error, ValueError) as exc:
        logger.error(
            "Failed to parse CSV payload",
            extra={"error": str(exc), "delimiter": delimiter, "source_file": source_name},
        )
        raise ParseFailure(f"Error parsing CSV: {exc}") from exc

    if frame.empty:
        raise EmptyDataset("Could not parse CSV or CSV is empty/invalid.")

    if trimmed:
        logger.warning(
            "Dropped extra cells from rows longer than the header",
            extra={"rows": len(trimmed), "cells": sum(trimmed), "source_file": source_name},
        )

    headers = [_cell_text(value) for value in frame.iloc[0].tolist()]
    parsed_rows = _build_rows(headers, frame.iloc[1:])
    rows = [row for row in parsed_rows if not _is_empty_row(row)]

    if not rows:
        raise EmptyDataset("CSV file appears to be empty or contains no valid data.")

    logger.info(
        "CSV payload parsed",
        extra={
            "rows": len(rows),
            "dropped": len(parsed_rows) - len(rows),
            "columns": headers,
            "delimiter": delimiter,
            "source_file": source_name,
        },
    )
    return ParsedTable(
        headers=headers,
        rows=rows,
        dropped_rows=len(parsed_rows) - len(rows),
        delimiter=delimiter,
        trimmed_rows=len(trimmed),
    )

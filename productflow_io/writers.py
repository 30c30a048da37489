"""Serialization helpers for transformed product tables."""

# Module responsibilities:
# - Render ordered target rows as CSV, XLSX or JSON bytes with a fixed column order.
# - Resolve the download file name for a given format.

from __future__ import annotations

import io
import json
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd
from openpyxl import Workbook

from productflow.core.errors import ExportError

from .schema import ExportFormat
from .utils.log import get_logger

logger = get_logger("writers")

DEFAULT_FILE_STEM = "updated_products"

MEDIA_TYPES: Dict[str, str] = {
    "csv": "text/csv;charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "json": "application/json",
}


def _ordered_values(rows: Iterable[Mapping[str, str]], columns: Sequence[str]) -> List[List[str]]:
    return [[row.get(col, "") for col in columns] for row in rows]


def to_csv_bytes(rows: Iterable[Mapping[str, str]], columns: Sequence[str]) -> bytes:
    """Render rows as CSV with a header row and minimal quoting."""

    frame = pd.DataFrame(_ordered_values(rows, columns), columns=list(columns), dtype=str)
    text = frame.to_csv(index=False, lineterminator="\r\n")
    return text.encode("utf-8")


def to_xlsx_bytes(
    rows: Iterable[Mapping[str, str]],
    columns: Sequence[str],
    *,
    sheet_title: str = "Products",
) -> bytes:
    """Render rows into a single-sheet workbook."""

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title
    ws.append(list(columns))
    for values in _ordered_values(rows, columns):
        ws.append(values)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def to_json_bytes(rows: Iterable[Mapping[str, str]], columns: Sequence[str]) -> bytes:
    """Render rows as a JSON array of objects keyed in column order."""

    payload = [dict(zip(columns, values)) for values in _ordered_values(rows, columns)]
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


_SERIALIZERS = {
    "csv": to_csv_bytes,
    "xlsx": to_xlsx_bytes,
    "json": to_json_bytes,
}


def serialize(
    rows: Sequence[Mapping[str, str]],
    columns: Sequence[str],
    fmt: ExportFormat = "csv",
) -> bytes:
    """Dispatch to the serializer registered for ``fmt``.

    Raises:
        ExportError: When ``fmt`` is not one of csv/xlsx/json.
    """

    serializer = _SERIALIZERS.get(fmt)
    if serializer is None:
        raise ExportError(f"Unsupported export format: {fmt}")
    content = serializer(rows, columns)
    logger.info(
        "Table serialized",
        extra={"format": fmt, "rows": len(rows), "bytes": len(content)},
    )
    return content


def resolve_filename(custom_name: Optional[str], fmt: ExportFormat = "csv") -> str:
    """Return ``<custom_name>.<fmt>`` or ``updated_products.<fmt>``."""

    stem = (custom_name or "").strip() or DEFAULT_FILE_STEM
    return f"{stem}.{fmt}"

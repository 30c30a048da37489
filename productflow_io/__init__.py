"""`productflow_io` top-level package exports the file I/O helpers for product tables."""

# Module responsibilities:
# - Re-export the parsing, acceptance and serialization helpers so consumers have a stable API surface.

from __future__ import annotations

from .csv_reader import read_rows
from .file_types import ensure_supported, guess_media_type, is_supported
from .schema import ExportFormat, ParsedTable
from .writers import (
    MEDIA_TYPES,
    resolve_filename,
    serialize,
    to_csv_bytes,
    to_json_bytes,
    to_xlsx_bytes,
)

__all__ = [
    "read_rows",
    "ensure_supported",
    "guess_media_type",
    "is_supported",
    "ExportFormat",
    "ParsedTable",
    "MEDIA_TYPES",
    "resolve_filename",
    "serialize",
    "to_csv_bytes",
    "to_json_bytes",
    "to_xlsx_bytes",
]

__version__ = "0.1.0"

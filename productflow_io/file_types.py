"""Acceptance rules for uploaded product files."""

# Module responsibilities:
# - Decide whether an upload looks like CSV/plain text before any parsing happens.
# - Infer a media type from the file name when the caller does not declare one.

from __future__ import annotations

import mimetypes
from pathlib import PurePath
from typing import Optional

from productflow.core.errors import UnsupportedFileType

ACCEPTED_MEDIA_TYPES = frozenset(
    {
        "text/csv",
        "application/vnd.ms-excel",
        "text/plain",
    }
)
ACCEPTED_EXTENSIONS = frozenset({".csv", ".txt"})


def guess_media_type(filename: str) -> Optional[str]:
    media_type, _ = mimetypes.guess_type(filename)
    return media_type


def _base_media_type(media_type: Optional[str]) -> str:
    if not media_type:
        return ""
    # Drop parameters such as ``;charset=utf-8``.
    return media_type.split(";", 1)[0].strip().lower()


def is_supported(filename: str, media_type: Optional[str] = None) -> bool:
    """Return True when the declared/inferred type or the extension is accepted."""

    declared = _base_media_type(media_type or guess_media_type(filename))
    if declared in ACCEPTED_MEDIA_TYPES:
        return True
    return PurePath(filename).suffix.lower() in ACCEPTED_EXTENSIONS


def ensure_supported(filename: str, media_type: Optional[str] = None) -> None:
    """Raise :class:`UnsupportedFileType` for anything that is not CSV-like."""

    if not is_supported(filename, media_type):
        raise UnsupportedFileType(
            f"Please select a valid CSV file (got {filename!r}, type {media_type or 'unknown'})"
        )

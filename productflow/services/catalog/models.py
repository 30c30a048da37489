"""Data models used by the catalog transformation service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

SourceRow = Dict[str, str]
TargetRow = Dict[str, str]


@dataclass(slots=True)
class FileInfo:
    """Name, size and row count of the currently loaded file."""

    name: str = ""
    size_kb: float = 0.0
    rows: int = 0


@dataclass(slots=True)
class CellEdit:
    """Before/after record of one in-place source cell edit."""

    row_index: int
    header: str
    before: str
    after: str

    @property
    def changed(self) -> bool:
        return self.before != self.after


@dataclass(slots=True)
class ExportArtifact:
    """Serialized download produced from the transformed rows."""

    file_name: str
    format: str
    media_type: str
    content: bytes
    rows: int


@dataclass(slots=True)
class CatalogStats:
    """Summary figures shown next to the export controls."""

    count: int
    min_price: float
    max_price: float
    avg_profit: float

    @property
    def price_range(self) -> str:
        return f"${self.min_price:.2f} - ${self.max_price:.2f}"


@dataclass(slots=True)
class PricingPreview:
    """Worked example of the price rule applied to a sample price."""

    sample: float
    margin_amount: float
    conversion_rate: float
    result: float


__all__ = [
    "CatalogStats",
    "CellEdit",
    "ExportArtifact",
    "FileInfo",
    "PricingPreview",
    "SourceRow",
    "TargetRow",
]

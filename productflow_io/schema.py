"""Shared schemas for parsed and exported tables."""

# Module responsibilities:
# - Provide the container handed from the parsing layer to the transformation engine.
# - Name the export formats understood by the serialization layer.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal

ExportFormat = Literal["csv", "xlsx", "json"]

Row = Dict[str, str]


@dataclass(slots=True)
class ParsedTable:
    """Outcome of parsing an uploaded file.

    ``headers`` keeps the header row exactly as discovered, duplicates included.
    ``rows`` only holds rows with at least one non-empty cell.
    ``trimmed_rows`` counts rows that had more cells than the header row.
    """

    headers: List[str]
    rows: List[Row] = field(default_factory=list)
    dropped_rows: int = 0
    delimiter: str = ","
    trimmed_rows: int = 0

    @property
    def row_count(self) -> int:
        return len(self.rows)

"""Explicit session state for one upload/map/export cycle.

The session owns the loaded rows and headers, the mapping store, pricing
parameters and tag set. File-level failures leave it empty; per-cell price
failures only blank that cell.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import ValidationError

from productflow.core.errors import ConfigError, ExportError, MappingError, RowIndexError
from productflow_io import MEDIA_TYPES, ExportFormat, ensure_supported, read_rows, resolve_filename, serialize

from .mapping import MappingStore
from .matcher import suggest
from .models import CatalogStats, CellEdit, ExportArtifact, FileInfo, PricingPreview, SourceRow, TargetRow
from .pricing import PricingParameters, pricing_preview
from .schema import DEFAULT_SCHEMA, TargetSchema
from .stats import calculate_stats
from .tags import SUGGESTED_TAGS, TagSet
from .transformer import transform_rows

LOGGER = logging.getLogger(__name__)

PREVIEW_ROWS = 10


class Session:
    """Mutable context passed to the pure transformation functions."""

    def __init__(
        self,
        schema: TargetSchema = DEFAULT_SCHEMA,
        pricing: PricingParameters | None = None,
        tags: TagSet | None = None,
    ) -> None:
        self.schema = schema
        self.pricing = pricing or PricingParameters()
        self.tags = tags if tags is not None else TagSet()
        self.rows: List[SourceRow] = []
        self.headers: List[str] = []
        self.mapping = MappingStore(schema)
        self.file_info = FileInfo()
        self.last_export: Optional[ExportArtifact] = None

    @property
    def loaded(self) -> bool:
        return bool(self.rows)

    def reset(self) -> None:
        """Discard file state; pricing and tags are user settings and stay."""

        self.rows = []
        self.headers = []
        self.mapping = MappingStore(self.schema)
        self.file_info = FileInfo()
        self.last_export = None

    def load(self, filename: str, data: bytes, media_type: Optional[str] = None) -> FileInfo:
        """Accept, parse and auto-map a new file.

        Raises:
            UnsupportedFileType: Before anything else; state is left untouched.
            ParseFailure: When parsing fails; the session is left empty.
        """

        ensure_supported(filename, media_type)
        self.reset()

        # ParseFailure/EmptyDataset propagate with the session already empty.
        table = read_rows(data, source_name=filename)

        self.rows = table.rows
        self.headers = list(table.headers)
        self.mapping = MappingStore.from_headers(self.headers, self.schema)
        self.file_info = FileInfo(
            name=filename,
            size_kb=round(len(data) / 1024, 2),
            rows=len(self.rows),
        )
        LOGGER.info(
            "Loaded %s rows, %s headers, %s auto-mapped",
            len(self.rows),
            len(self.headers),
            len(self.mapping) - len(self.mapping.unmapped_sources()),
            extra=self._log_context(),
        )
        return self.file_info

    def _log_context(self) -> dict:
        return {"source_file": self.file_info.name or "-"}

    def _invalidate(self) -> None:
        self.last_export = None

    def set_mapping(self, source: str, target: Optional[str]) -> None:
        if source not in self.mapping:
            raise MappingError(f"Unknown source header: {source}")
        self.mapping.set(source, target)
        self._invalidate()

    def mapping_for(self, source: str) -> Optional[str]:
        return self.mapping.get(source)

    def suggestions(self, source: str) -> List[str]:
        return suggest(source, self.schema)

    def edit_cell(self, row_index: int, header: str, value: str) -> CellEdit:
        """Overwrite one source cell in place and report the before/after values."""

        if not 0 <= row_index < len(self.rows):
            raise RowIndexError(f"Row {row_index} is outside the loaded dataset ({len(self.rows)} rows)")
        if header not in self.headers:
            raise RowIndexError(f"Unknown column: {header}")
        row = self.rows[row_index]
        edit = CellEdit(row_index=row_index, header=header, before=row.get(header, ""), after=value)
        row[header] = value
        LOGGER.debug(
            "Cell edit row=%s header=%s: %r -> %r",
            row_index,
            header,
            edit.before,
            edit.after,
            extra=self._log_context(),
        )
        self._invalidate()
        return edit

    def preview(self, limit: int = PREVIEW_ROWS) -> List[SourceRow]:
        return [dict(row) for row in self.rows[:limit]]

    def set_pricing(self, margin_percent: object = None, conversion_rate: object = None) -> PricingParameters:
        try:
            self.pricing = PricingParameters(
                margin_percent=margin_percent,
                conversion_rate=conversion_rate,
            )
        except ValidationError as exc:
            raise ConfigError(f"Invalid pricing parameters: {exc}") from exc
        self._invalidate()
        return self.pricing

    def add_tag(self, tag: str) -> bool:
        added = self.tags.add(tag)
        if added:
            self._invalidate()
        return added

    def suggested_tags(self) -> List[str]:
        """Quick-pick tags not yet in the tag set."""

        return [tag for tag in SUGGESTED_TAGS if tag not in self.tags]

    def remove_tag(self, tag: str) -> bool:
        removed = self.tags.remove(tag)
        if removed:
            self._invalidate()
        return removed

    def process(self) -> List[TargetRow]:
        return transform_rows(self.rows, self.mapping, self.schema, self.pricing, self.tags)

    def stats(self) -> CatalogStats:
        return calculate_stats(self.rows, self.mapping, self.pricing.margin_percent)

    def pricing_preview(self) -> PricingPreview:
        return pricing_preview(self.pricing)

    def export(self, fmt: ExportFormat = "csv", file_name: Optional[str] = None) -> ExportArtifact:
        """Transform the current rows and serialize them for download."""

        if not self.rows:
            raise ExportError("Please upload a CSV file first.")
        if fmt not in MEDIA_TYPES:
            raise ExportError(f"Unsupported export format: {fmt}")
        processed = self.process()
        content = serialize(processed, self.schema.columns, fmt)
        artifact = ExportArtifact(
            file_name=resolve_filename(file_name, fmt),
            format=fmt,
            media_type=MEDIA_TYPES[fmt],
            content=content,
            rows=len(processed),
        )
        self.last_export = artifact
        LOGGER.info("Export ready: %s (%s rows)", artifact.file_name, artifact.rows, extra=self._log_context())
        return artifact

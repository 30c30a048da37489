"""Reporting utilities for catalog conversions."""

from __future__ import annotations

from pathlib import Path

from .mapping import MappingStore
from .models import CatalogStats, FileInfo


def _cell(value: str | None) -> str:
    if not value:
        return "-"
    return value.replace("|", "\\|")


def generate_report(
    report_path: Path,
    file_info: FileInfo,
    mapping: MappingStore,
    stats: CatalogStats,
    output_name: str,
) -> Path:
    """Write a Markdown summary of the mapping and the exported dataset."""

    report_path.parent.mkdir(parents=True, exist_ok=True)

    lines = ["# Product Conversion Report", ""]
    lines.append(f"- Source file: {file_info.name} ({file_info.size_kb:.2f} KB)")
    lines.append(f"- Rows exported: {stats.count}")
    lines.append(f"- Price range: {stats.price_range}")
    lines.append(f"- Average profit: ${stats.avg_profit:.2f}")
    lines.append(f"- Output: `{output_name}`")
    lines.append("")

    lines.append("## Column mapping")
    lines.append("")
    lines.append("| Source column | Target column |")
    lines.append("| --- | --- |")
    for source, target in mapping.items():
        lines.append(f"| {_cell(source)} | {_cell(target)} |")
    lines.append("")

    unmapped = mapping.unmapped_sources()
    if unmapped:
        lines.append(f"Unmapped source columns (dropped): {', '.join(unmapped)}")
        lines.append("")

    shadowed = mapping.shadowed_sources()
    if shadowed:
        lines.append("## Ignored duplicate assignments")
        for source, target in shadowed:
            lines.append(f"- {source} -> {target} (an earlier column already fills it)")
        lines.append("")

    empty = mapping.empty_targets()
    if empty:
        lines.append(f"Target columns left empty: {', '.join(empty)}")

    report_path.write_text("\n".join(lines), encoding="utf-8")
    return report_path

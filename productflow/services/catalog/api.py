"""Public API for one-shot catalog conversion."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional
import logging

from pydantic import BaseModel, ConfigDict

from productflow.config import JobConfig
from productflow_io import guess_media_type

from .models import CatalogStats
from .report import generate_report
from .session import Session

LOGGER = logging.getLogger(__name__)


class ProcessResult(BaseModel):
    """Aggregated outcome returned to callers."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    rows: int
    output_path: str
    report_path: str
    mapping: Dict[str, Optional[str]]
    stats: CatalogStats


def apply_config(session: Session, config: JobConfig) -> list[str]:
    """Apply job settings to a loaded session.

    Mapping overrides naming a column the file does not have are skipped and
    returned so callers can report them.
    """

    session.set_pricing(config.pricing.margin_percent, config.pricing.conversion_rate)
    for tag in config.tags:
        session.add_tag(tag)

    skipped: list[str] = []
    for source, target in config.mapping.items():
        if source not in session.mapping:
            skipped.append(source)
            continue
        session.set_mapping(source, target)
    if skipped:
        LOGGER.warning("Mapping overrides for missing columns skipped: %s", skipped)
    return skipped


def process_catalog(
    input_path: str | Path,
    output_dir: str | Path,
    config: JobConfig | None = None,
) -> ProcessResult:
    """Convert one product file into the target schema and write a report."""

    path = Path(input_path)
    out_dir = Path(output_dir)
    config = config or JobConfig()

    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")

    LOGGER.info("Reading input file: %s", path)
    session = Session()
    session.load(path.name, path.read_bytes(), guess_media_type(path.name))
    apply_config(session, config)

    artifact = session.export(config.export.format, config.export.file_name)
    out_dir.mkdir(parents=True, exist_ok=True)
    output_path = out_dir / artifact.file_name
    output_path.write_bytes(artifact.content)

    stats = session.stats()
    report_path = generate_report(
        out_dir / f"{output_path.stem}_report.md",
        session.file_info,
        session.mapping,
        stats,
        artifact.file_name,
    )

    LOGGER.info("Processed %s rows into %s", artifact.rows, output_path)

    return ProcessResult(
        rows=artifact.rows,
        output_path=str(output_path),
        report_path=str(report_path),
        mapping=session.mapping.to_dict(),
        stats=stats,
    )

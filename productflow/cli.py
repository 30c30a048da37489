"""Typer based command line entry points for ProductFlow."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from productflow.config import JobConfig, load_job_config
from productflow.core.errors import ConfigError, ProductFlowError
from productflow.core.logger import get_logger
from productflow.services.catalog.api import process_catalog
from productflow.services.catalog.matcher import score_header, suggest
from productflow.services.catalog.session import Session
from productflow.services.catalog.tags import SUGGESTED_TAGS
from productflow_io import guess_media_type
from productflow_io.utils.paths import ensure_default_structure

EXPORT_FORMATS = {"csv", "xlsx", "json"}

app = typer.Typer(help="Map, reprice and export product CSV files.")


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    logger = get_logger()

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    logging.getLogger().setLevel(level_value)
    logger.setLevel(level_value)


def _validate_format(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.lower()
    if value not in EXPORT_FORMATS:
        raise typer.BadParameter("format must be one of csv, xlsx, json")
    return value


def _parse_overrides(items: List[str]) -> dict[str, Optional[str]]:
    overrides: dict[str, Optional[str]] = {}
    for item in items:
        source, sep, target = item.partition("=")
        if not sep or not source.strip():
            raise typer.BadParameter(f"Invalid mapping override '{item}', expected SOURCE=TARGET")
        overrides[source.strip()] = target.strip() or None
    return overrides


@app.command("suggest")
def cli_suggest(
    headers: List[str] = typer.Argument(..., help="Source column headers to score"),
) -> None:
    """Print the top target suggestions for each source header."""

    for header in headers:
        ranked = suggest(header)
        if not ranked:
            typer.echo(f"{header}: no suggestions")
            continue
        parts = [f"{target} ({score_header(header, target):.0f})" for target in ranked]
        typer.echo(f"{header}: {', '.join(parts)}")


@app.command("automap")
def cli_automap(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, resolve_path=True, help="CSV file to inspect"),
) -> None:
    """Show the automatic mapping for a file's header row."""

    session = Session()
    try:
        info = session.load(file.name, file.read_bytes(), guess_media_type(file.name))
    except ProductFlowError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    typer.echo(f"{info.name}: {info.rows} rows, {info.size_kb:.2f} KB")
    for source, target in session.mapping.items():
        typer.echo(f"{source} -> {target or '-'}")


@app.command("convert")
def cli_convert(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, resolve_path=True, help="CSV file to convert"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Directory for generated files (default ~/ProductFlow/out)", resolve_path=True
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Job YAML file", exists=True, dir_okay=False, resolve_path=True
    ),
    margin: Optional[float] = typer.Option(None, "--margin", help="Margin percentage added to prices"),
    rate: Optional[float] = typer.Option(None, "--rate", help="Currency conversion rate applied after margin"),
    tags: List[str] = typer.Option(
        [],
        "--tag",
        help=f"Tag written to every row (repeat for multiple); suggested: {', '.join(SUGGESTED_TAGS)}",
    ),
    mappings: List[str] = typer.Option(
        [], "--map", help="Mapping override as SOURCE=TARGET (empty TARGET unmaps)"
    ),
    export_format: Optional[str] = typer.Option(None, "--format", help="Export format: csv, xlsx or json"),
    name: Optional[str] = typer.Option(None, "--name", help="Output file name without extension"),
) -> None:
    """Convert a product CSV into the target schema."""

    logger = get_logger()
    export_format = _validate_format(export_format)
    overrides = _parse_overrides(mappings)

    try:
        config = load_job_config(config_path) if config_path else JobConfig()
    except ConfigError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=2) from exc

    if margin is not None:
        config.pricing.margin_percent = margin
    if rate is not None:
        config.pricing.conversion_rate = rate
    for tag in tags:
        if tag not in config.tags:
            config.tags.append(tag)
    config.mapping.update(overrides)
    if export_format:
        config.export.format = export_format
    if name:
        config.export.file_name = name

    try:
        result = process_catalog(file, output or ensure_default_structure()["out"], config)
    except ConfigError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=2) from exc
    except ProductFlowError as exc:
        typer.secho(f"Conversion failed: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    typer.echo("Processing finished")
    typer.echo(f"Rows: {result.rows}")
    typer.echo(f"Price range: {result.stats.price_range}")
    typer.echo(f"Output: {result.output_path}")
    typer.echo(f"Report: {result.report_path}")
    logger.info("CLI conversion completed: output=%s", result.output_path)


if __name__ == "__main__":
    app()

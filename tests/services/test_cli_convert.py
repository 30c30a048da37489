"""CLI integration tests for product conversion."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
from typer.testing import CliRunner

from productflow import cli


@pytest.fixture
def cli_runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    # Ensure logging does not write into the user's workspace.
    import productflow.core.logger as core_logger

    monkeypatch.setattr(core_logger, "_work_dir", lambda: tmp_path / "work")
    monkeypatch.setattr(core_logger, "_LOGGER", None, raising=False)
    return CliRunner()


def test_convert_with_options(cli_runner: CliRunner, tmp_path: Path, sample_csv: Path) -> None:
    out_dir = tmp_path / "out"

    result = cli_runner.invoke(
        cli.app,
        [
            "convert",
            str(sample_csv),
            "--output",
            str(out_dir),
            "--margin",
            "10",
            "--tag",
            "Sale",
            "--map",
            "Qty=Stock",
            "--name",
            "export",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Rows: 3" in result.output
    frame = pd.read_csv(out_dir / "export.csv", dtype=str, keep_default_na=False)
    assert frame["Regular price"].tolist() == ["21.99", "", "110.00"]
    assert frame["Stock"].tolist() == ["5", "3", "0"]
    assert set(frame["Tags"]) == {"Sale"}
    assert (out_dir / "export_report.md").exists()


def test_convert_options_override_job_file(cli_runner: CliRunner, tmp_path: Path, sample_csv: Path) -> None:
    job = tmp_path / "job.yaml"
    job.write_text("pricing:\n  margin_percent: 50\nexport:\n  format: json\n", encoding="utf-8")

    result = cli_runner.invoke(
        cli.app,
        ["convert", str(sample_csv), "-o", str(tmp_path), "--config", str(job), "--margin", "0", "--format", "xlsx"],
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "updated_products.xlsx").exists()
    assert not (tmp_path / "updated_products.json").exists()


def test_convert_rejects_unsupported_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    source = tmp_path / "catalog.pdf"
    source.write_bytes(b"%PDF-1.7")

    result = cli_runner.invoke(cli.app, ["convert", str(source), "-o", str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "valid CSV file" in result.output


def test_convert_bad_job_file_exit_code(cli_runner: CliRunner, tmp_path: Path, sample_csv: Path) -> None:
    job = tmp_path / "job.yaml"
    job.write_text("- not a mapping\n", encoding="utf-8")

    result = cli_runner.invoke(cli.app, ["convert", str(sample_csv), "-o", str(tmp_path), "--config", str(job)])

    assert result.exit_code == 2


def test_convert_rejects_unknown_format(cli_runner: CliRunner, tmp_path: Path, sample_csv: Path) -> None:
    result = cli_runner.invoke(cli.app, ["convert", str(sample_csv), "-o", str(tmp_path), "--format", "xml"])

    assert result.exit_code != 0


def test_suggest_and_automap(cli_runner: CliRunner, sample_csv: Path) -> None:
    suggested = cli_runner.invoke(cli.app, ["suggest", "Stock qty", "Qty"])
    assert suggested.exit_code == 0, suggested.output
    assert "Stock qty: Stock (80)" in suggested.output
    assert "Qty: no suggestions" in suggested.output

    mapped = cli_runner.invoke(cli.app, ["automap", str(sample_csv)])
    assert mapped.exit_code == 0, mapped.output
    assert "Product Title -> Name" in mapped.output
    assert "Qty -> -" in mapped.output


def test_automap_semicolon_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    source = tmp_path / "eu_export.csv"
    source.write_text("Name;Regular price;Stock qty\nWidget;10,50;4\n", encoding="utf-8")

    result = cli_runner.invoke(cli.app, ["automap", str(source)])

    assert result.exit_code == 0, result.output
    assert "Regular price -> Regular price" in result.output
    assert "Stock qty -> Stock" in result.output

"""Session lifecycle: load, edit, map, export."""

from __future__ import annotations

import io
import json

import pandas as pd
import pytest
from openpyxl import load_workbook

from productflow.core.errors import (
    ConfigError,
    EmptyDataset,
    ExportError,
    MappingError,
    RowIndexError,
    UnsupportedFileType,
)
from productflow.services.catalog.schema import PRODUCT_HEADERS
from productflow.services.catalog.session import Session


@pytest.fixture()
def session(sample_bytes: bytes) -> Session:
    s = Session()
    s.load("products.csv", sample_bytes, "text/csv")
    return s


def test_load_filters_empty_rows_and_auto_maps(session: Session, sample_bytes: bytes) -> None:
    assert session.file_info.rows == 3
    assert session.file_info.name == "products.csv"
    assert session.file_info.size_kb == round(len(sample_bytes) / 1024, 2)
    assert session.headers == ["Product Title", "Cost", "Qty", "Tags"]
    assert session.mapping.to_dict() == {
        "Product Title": "Name",
        "Cost": "Regular price",
        "Qty": None,
        "Tags": "Tags",
    }


def test_unsupported_file_leaves_state_untouched(session: Session) -> None:
    with pytest.raises(UnsupportedFileType):
        session.load("catalog.pdf", b"%PDF-1.7", "application/pdf")

    assert session.file_info.rows == 3
    assert session.loaded


def test_parse_failure_resets_session(session: Session) -> None:
    with pytest.raises(EmptyDataset):
        session.load("blank.csv", b"Name,Price\n", "text/csv")

    assert not session.loaded
    assert session.headers == []
    assert len(session.mapping) == 0
    assert session.file_info.name == ""


@pytest.mark.parametrize("delimiter", [";", "\t"])
def test_load_semicolon_and_tab_files_map_prices(delimiter: str) -> None:
    payload = delimiter.join(["Name", "Regular price"]) + "\n" + delimiter.join(["Widget", "10"]) + "\n"
    s = Session()
    s.load("export.txt", payload.encode("utf-8"), "text/plain")

    assert s.mapping.to_dict() == {"Name": "Name", "Regular price": "Regular price"}
    assert s.process()[0]["Regular price"] == "10.00"


def test_load_keeps_rows_with_trailing_delimiter() -> None:
    s = Session()
    s.load("products.csv", b"Name,Regular price\nWidget,10,\nGadget,5\n", "text/csv")

    assert s.file_info.rows == 2
    assert [r["Regular price"] for r in s.process()] == ["10.00", "5.00"]


def test_edit_cell_mutates_source_row(session: Session) -> None:
    edit = session.edit_cell(1, "Cost", "12.50")

    assert (edit.before, edit.after, edit.changed) == ("abc", "12.50", True)
    assert session.rows[1]["Cost"] == "12.50"
    assert session.process()[1]["Regular price"] == "12.50"


@pytest.mark.parametrize(("row_index", "header"), [(3, "Cost"), (-1, "Cost"), (0, "Price")])
def test_edit_cell_rejects_unknown_address(session: Session, row_index: int, header: str) -> None:
    with pytest.raises(RowIndexError):
        session.edit_cell(row_index, header, "1")


def test_set_mapping_validates_source(session: Session) -> None:
    session.set_mapping("Qty", "Stock")
    assert session.mapping_for("Qty") == "Stock"

    with pytest.raises(MappingError):
        session.set_mapping("Quantity", "Stock")


def test_suggestions_for_unmatched_header(session: Session) -> None:
    assert session.suggestions("Qty") == []
    assert session.suggestions("Cost") == []
    assert session.suggestions("Stock qty")[0] == "Stock"


def test_process_applies_pricing_and_tags(session: Session) -> None:
    session.set_pricing(10, 1)
    session.add_tag("Electronics")
    session.add_tag("Books")
    session.add_tag("Electronics")

    output = session.process()

    assert len(output) == 3
    assert [r["Regular price"] for r in output] == ["21.99", "", "110.00"]
    assert {r["Tags"] for r in output} == {"Electronics, Books"}
    assert [r["Name"] for r in output] == ["Widget", "Gadget", "Gizmo"]


def test_set_pricing_rejects_non_numeric(session: Session) -> None:
    with pytest.raises(ConfigError):
        session.set_pricing("ten", 1)


def test_export_csv_round_trips_schema(session: Session) -> None:
    artifact = session.export()

    assert artifact.file_name == "updated_products.csv"
    assert artifact.rows == 3
    frame = pd.read_csv(io.BytesIO(artifact.content), dtype=str, keep_default_na=False)
    assert list(frame.columns) == list(PRODUCT_HEADERS)
    assert frame["Regular price"].tolist() == ["19.99", "", "100.00"]
    assert session.last_export is artifact


def test_export_json_and_xlsx(session: Session) -> None:
    payload = json.loads(session.export("json", "spring").content)
    assert list(payload[0].keys()) == list(PRODUCT_HEADERS)

    artifact = session.export("xlsx")
    ws = load_workbook(io.BytesIO(artifact.content)).active
    assert ws.max_row == 4
    assert ws.cell(row=2, column=PRODUCT_HEADERS.index("Name") + 1).value == "Widget"


def test_edits_invalidate_last_export(session: Session) -> None:
    session.export()
    session.remove_tag("missing")
    assert session.last_export is not None

    session.set_mapping("Qty", "Stock")
    assert session.last_export is None


def test_export_without_rows_fails() -> None:
    with pytest.raises(ExportError):
        Session().export()


def test_export_unknown_format(session: Session) -> None:
    with pytest.raises(ExportError):
        session.export("xml")  # type: ignore[arg-type]


def test_suggested_tags_skip_tags_already_added(session: Session) -> None:
    assert "Electronics" in session.suggested_tags()

    session.add_tag("Electronics")

    assert "Electronics" not in session.suggested_tags()
    assert session.suggested_tags()[0] == "Clothing"


def test_reset_keeps_pricing_and_tags(session: Session) -> None:
    session.set_pricing(15, 2)
    session.add_tag("Toys")

    session.reset()

    assert session.rows == []
    assert session.pricing.margin_percent == 15
    assert session.tags.to_list() == ["Toys"]


def test_stats_and_preview(sample_bytes: bytes) -> None:
    s = Session()
    s.load("products.csv", sample_bytes)
    s.set_pricing(10, 1)

    stats = s.stats()

    assert stats.count == 3
    assert stats.price_range == "$19.99 - $100.00"
    assert stats.avg_profit == pytest.approx((19.99 + 100) / 2 * 0.1)
    assert len(s.preview(2)) == 2
    assert s.pricing_preview().result == 110

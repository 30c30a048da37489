from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SAMPLE_CSV = (
    "Product Title,Cost,Qty,Tags\n"
    "Widget,$19.99,5,old\n"
    "Gadget,abc,3,old\n"
    ",,,\n"
    "Gizmo,100,0,\n"
)


@pytest.fixture()
def sample_bytes() -> bytes:
    return SAMPLE_CSV.encode("utf-8")


@pytest.fixture()
def sample_csv(tmp_path: Path, sample_bytes: bytes) -> Path:
    path = tmp_path / "products.csv"
    path.write_bytes(sample_bytes)
    return path

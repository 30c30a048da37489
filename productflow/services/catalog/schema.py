"""Target product schema registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

PRODUCT_HEADERS: Tuple[str, ...] = (
    "ID",
    "Type",
    "SKU",
    "GTIN, UPC, EAN, or ISBN",
    "Name",
    "Published",
    "Is featured?",
    "Visibility in catalog",
    "Short description",
    "Description",
    "Date sale price starts",
    "Date sale price ends",
    "Tax status",
    "Tax class",
    "In stock?",
    "Stock",
    "Low stock amount",
    "Backorders allowed?",
    "Sold individually?",
    "Weight (kg)",
    "Length (cm)",
    "Width (cm)",
    "Height (cm)",
    "Allow customer reviews?",
    "Purchase note",
    "Sale price",
    "Regular price",
    "Categories",
    "Tags",
    "Shipping class",
    "Images",
    "Download limit",
    "Download expiry days",
    "Parent",
    "Grouped products",
    "Upsells",
    "Cross-sells",
    "External URL",
    "Button text",
    "Position",
    "Brands",
)

REGULAR_PRICE_FIELD = "Regular price"
SALE_PRICE_FIELD = "Sale price"
PRICE_FIELDS = frozenset({REGULAR_PRICE_FIELD, SALE_PRICE_FIELD})
TAGS_FIELD = "Tags"


@dataclass(frozen=True)
class TargetSchema:
    """Fixed, ordered list of output columns; order defines output column order."""

    columns: Tuple[str, ...] = PRODUCT_HEADERS

    def __post_init__(self) -> None:
        dupes = sorted({c for c in self.columns if self.columns.count(c) > 1})
        if dupes:
            raise ValueError(f"Target schema columns must be unique: {', '.join(dupes)}")

    @classmethod
    def of(cls, columns: Sequence[str]) -> "TargetSchema":
        return cls(columns=tuple(columns))

    def __iter__(self) -> Iterator[str]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def __contains__(self, header: object) -> bool:
        return header in self.columns


DEFAULT_SCHEMA = TargetSchema()

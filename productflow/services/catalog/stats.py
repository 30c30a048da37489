"""Dataset statistics for the export panel."""

from __future__ import annotations

from typing import Iterable, List

from .models import CatalogStats, SourceRow
from .pricing import parse_price
from .schema import REGULAR_PRICE_FIELD, TargetSchema
from .transformer import MappingLike, resolve_sources


def calculate_stats(
    rows: Iterable[SourceRow],
    mapping: MappingLike,
    margin_percent: float = 0.0,
) -> CatalogStats:
    """Summarize raw regular prices of the source rows.

    Unparseable or non-positive prices are left out of the range and profit
    figures but rows still count. Average profit is the mean raw price
    times ``margin_percent / 100``.
    """

    rows = list(rows)
    if not rows:
        return CatalogStats(count=0, min_price=0.0, max_price=0.0, avg_profit=0.0)

    source = resolve_sources(mapping, TargetSchema.of([REGULAR_PRICE_FIELD]))[REGULAR_PRICE_FIELD]
    prices: List[float] = []
    for row in rows:
        raw = row.get(source) if source else None
        price = parse_price(raw or 0)
        if price is not None and price > 0:
            prices.append(price)

    if not prices:
        return CatalogStats(count=len(rows), min_price=0.0, max_price=0.0, avg_profit=0.0)

    average = sum(prices) / len(prices)
    return CatalogStats(
        count=len(rows),
        min_price=min(prices),
        max_price=max(prices),
        avg_profit=average * (margin_percent / 100),
    )

"""Project source rows onto the fixed target schema."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from .mapping import MappingStore
from .models import SourceRow, TargetRow
from .pricing import PricingParameters, adjust_price
from .schema import DEFAULT_SCHEMA, PRICE_FIELDS, TAGS_FIELD, TargetSchema
from .tags import TagSet

LOGGER = logging.getLogger(__name__)

MappingLike = Union[MappingStore, Mapping[str, Optional[str]]]


def resolve_sources(mapping: MappingLike, schema: TargetSchema = DEFAULT_SCHEMA) -> Dict[str, Optional[str]]:
    """Map each target column to the first source header assigned to it.

    Iteration follows the mapping's own order, so when two sources claim the
    same target the earlier one wins and later ones are ignored.
    """

    if isinstance(mapping, MappingStore):
        return mapping.resolve(schema)
    resolved: Dict[str, Optional[str]] = {}
    for column in schema:
        resolved[column] = next(
            (source for source, target in mapping.items() if target == column),
            None,
        )
    return resolved


def transform_row(
    row: SourceRow,
    sources: Mapping[str, Optional[str]],
    pricing: PricingParameters,
    tags: Sequence[str] | TagSet = (),
    schema: TargetSchema = DEFAULT_SCHEMA,
) -> TargetRow:
    """Build one output row with every schema column, in schema order."""

    tag_value = ", ".join(tags) if tags else ""
    out: TargetRow = {}
    for column in schema:
        source = sources.get(column)
        value = row.get(source) if source else None
        value = "" if value is None else str(value)

        if column in PRICE_FIELDS:
            value = adjust_price(value, pricing.margin_percent, pricing.conversion_rate)

        if column == TAGS_FIELD and tag_value:
            value = tag_value

        out[column] = value
    return out


def transform_rows(
    rows: Iterable[SourceRow],
    mapping: MappingLike,
    schema: TargetSchema = DEFAULT_SCHEMA,
    pricing: PricingParameters | None = None,
    tags: Sequence[str] | TagSet = (),
) -> List[TargetRow]:
    """Transform every source row, preserving row order."""

    pricing = pricing or PricingParameters()
    tags = list(tags)
    sources = resolve_sources(mapping, schema)
    price_sources = [sources[c] for c in schema if c in PRICE_FIELDS and sources.get(c)]

    output: List[TargetRow] = []
    blank_prices = 0
    for row in rows:
        target_row = transform_row(row, sources, pricing, tags, schema)
        blank_prices += sum(
            1
            for column in PRICE_FIELDS
            if column in target_row and sources.get(column) and target_row[column] == ""
        )
        output.append(target_row)

    LOGGER.debug(
        "Transformed %s rows (price sources=%s, unparseable price cells=%s)",
        len(output),
        price_sources,
        blank_prices,
    )
    return output

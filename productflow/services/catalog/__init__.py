"""Catalog transformation service package."""

from .mapping import MappingStore
from .matcher import auto_map, best_match, score_header, suggest
from .pricing import PricingParameters, adjust_price, parse_price
from .schema import DEFAULT_SCHEMA, PRODUCT_HEADERS, TargetSchema
from .session import Session
from .tags import SUGGESTED_TAGS, TagSet
from .transformer import transform_row, transform_rows

__all__ = [
    "DEFAULT_SCHEMA",
    "MappingStore",
    "PRODUCT_HEADERS",
    "PricingParameters",
    "SUGGESTED_TAGS",
    "Session",
    "TagSet",
    "TargetSchema",
    "adjust_price",
    "auto_map",
    "best_match",
    "parse_price",
    "score_header",
    "suggest",
    "transform_row",
    "transform_rows",
]

"""Header similarity scoring and automatic mapping.

Two independent heuristics live here:

* :func:`suggest` ranks every target header for one source header with
  :func:`score_header` and is used for interactive re-assignment.
* :func:`auto_map` is the coarse first pass run when headers are loaded:
  exact match, then substring containment, then :data:`HEADER_SYNONYMS`.

Both compare headers case-insensitively after trimming surrounding whitespace.
The scoring constants are load-bearing: changing them changes which
suggestions users see.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .schema import DEFAULT_SCHEMA

EXACT_SCORE = 100.0
CONTAINS_SCORE = 80.0
WORD_SCORE = 60.0
MIN_SCORE = 10.0
MAX_SUGGESTIONS = 3

_WORD_SPLIT = re.compile(r"[\s_-]+")

HEADER_SYNONYMS: Mapping[str, str] = {
    "price": "Regular price",
    "cost": "Regular price",
    "amount": "Regular price",
    "title": "Name",
    "product title": "Name",
    "product_title": "Name",
    "product_name": "Name",
    "description": "Description",
    "short_description": "Short description",
    "category": "Categories",
    "tag": "Tags",
    "image": "Images",
    "stock_quantity": "Stock",
    "weight": "Weight (kg)",
    "length": "Length (cm)",
    "width": "Width (cm)",
    "height": "Height (cm)",
}


def normalize_header(header: str) -> str:
    return header.strip().lower()


def _words(text: str) -> List[str]:
    return _WORD_SPLIT.split(text)


def score_header(source_header: str, target_header: str) -> float:
    """Score how well ``target_header`` describes ``source_header``.

    Returns 100 for an exact (normalized) match, 80 when either string
    contains the other, otherwise ``matching / max(len(src), len(tgt)) * 60``
    where ``matching`` counts source words that contain, or are contained by,
    some target word. Zero when no word matches.
    """

    source = normalize_header(source_header)
    target = normalize_header(target_header)

    if source == target:
        return EXACT_SCORE
    if source in target or target in source:
        return CONTAINS_SCORE

    source_words = _words(source)
    target_words = _words(target)
    matching = [
        word for word in source_words if any(word in tw or tw in word for tw in target_words)
    ]
    if not matching:
        return 0.0
    return len(matching) / max(len(source_words), len(target_words)) * WORD_SCORE


def score_all(source_header: str, targets: Iterable[str] = DEFAULT_SCHEMA) -> List[tuple[str, float]]:
    return [(target, score_header(source_header, target)) for target in targets]


def suggest(source_header: str, targets: Iterable[str] = DEFAULT_SCHEMA) -> List[str]:
    """Return up to three target headers scoring above 10, best first.

    Ties keep target schema order.
    """

    scored = [item for item in score_all(source_header, targets) if item[1] > MIN_SCORE]
    scored.sort(key=lambda item: item[1], reverse=True)
    return [target for target, _ in scored[:MAX_SUGGESTIONS]]


def best_match(
    source_header: str,
    targets: Sequence[str] = DEFAULT_SCHEMA.columns,
    synonyms: Mapping[str, str] = HEADER_SYNONYMS,
) -> Optional[str]:
    """Coarse single-header match used by :func:`auto_map`."""

    normalized = normalize_header(source_header)
    lowered = [(target, target.lower()) for target in targets]

    for target, low in lowered:
        if low == normalized:
            return target
    for target, low in lowered:
        if normalized in low or low in normalized:
            return target

    synonym = synonyms.get(normalized)
    if synonym and synonym in targets:
        return synonym
    return None


def auto_map(
    source_headers: Iterable[str],
    targets: Sequence[str] = DEFAULT_SCHEMA.columns,
    synonyms: Mapping[str, str] = HEADER_SYNONYMS,
) -> Dict[str, Optional[str]]:
    """Build the initial mapping for a header set, in header order.

    Duplicate source headers collapse onto one key; the last occurrence wins.
    Headers without a match map to ``None``.
    """

    targets = tuple(targets)
    mapping: Dict[str, Optional[str]] = {}
    for header in source_headers:
        mapping[header] = best_match(header, targets, synonyms)
    return mapping

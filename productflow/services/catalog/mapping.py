"""Source -> target header assignment store."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from productflow.core.errors import MappingError

from .matcher import auto_map
from .schema import DEFAULT_SCHEMA, TargetSchema

LOGGER = logging.getLogger(__name__)


def _clean_target(target: Optional[str]) -> Optional[str]:
    if target is None:
        return None
    target = str(target)
    return target or None


class MappingStore:
    """Ordered ``source header -> target header`` assignments.

    Each source header maps to at most one target (``None`` means unmapped).
    Nothing stops two source headers from pointing at the same target; the
    row transformer resolves that by taking the first one in store order.
    Re-assigning an existing source keeps its position in that order.
    """

    def __init__(self, schema: TargetSchema = DEFAULT_SCHEMA) -> None:
        self.schema = schema
        self._assignments: Dict[str, Optional[str]] = {}

    @classmethod
    def from_headers(cls, headers: Iterable[str], schema: TargetSchema = DEFAULT_SCHEMA) -> "MappingStore":
        """Populate a store with :func:`auto_map` suggestions."""

        store = cls(schema)
        store._assignments = auto_map(headers, schema.columns)
        return store

    @classmethod
    def from_dict(cls, assignments: Mapping[str, Optional[str]], schema: TargetSchema = DEFAULT_SCHEMA) -> "MappingStore":
        store = cls(schema)
        for source, target in assignments.items():
            store.set(source, target)
        return store

    def set(self, source: str, target: Optional[str]) -> None:
        """Assign ``source`` to ``target``; ``None`` or ``""`` unmaps it."""

        cleaned = _clean_target(target)
        if cleaned is not None and cleaned not in self.schema:
            raise MappingError(f"Unknown target header: {cleaned}")
        previous = self._assignments.get(source)
        self._assignments[source] = cleaned
        LOGGER.debug("Mapping change: %s -> %s (was %s)", source, cleaned, previous)

    def get(self, source: str) -> Optional[str]:
        return self._assignments.get(source)

    def source_for(self, target: str) -> Optional[str]:
        """Return the first source header assigned to ``target``, if any."""

        for source, assigned in self._assignments.items():
            if assigned == target:
                return source
        return None

    def resolve(self, columns: Iterable[str]) -> Dict[str, Optional[str]]:
        """Resolve every target column to its source header in one pass."""

        return {column: self.source_for(column) for column in columns}

    def unmapped_sources(self) -> List[str]:
        return [source for source, target in self._assignments.items() if target is None]

    def shadowed_sources(self) -> List[Tuple[str, str]]:
        """Sources ignored because an earlier source claims the same target."""

        claimed: set[str] = set()
        shadowed: List[Tuple[str, str]] = []
        for source, target in self._assignments.items():
            if target is None:
                continue
            if target in claimed:
                shadowed.append((source, target))
            claimed.add(target)
        return shadowed

    def empty_targets(self) -> List[str]:
        assigned = set(self._assignments.values())
        return [column for column in self.schema if column not in assigned]

    def to_dict(self) -> Dict[str, Optional[str]]:
        return dict(self._assignments)

    def items(self) -> Iterator[Tuple[str, Optional[str]]]:
        return iter(list(self._assignments.items()))

    def __contains__(self, source: object) -> bool:
        return source in self._assignments

    def __len__(self) -> int:
        return len(self._assignments)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._assignments))

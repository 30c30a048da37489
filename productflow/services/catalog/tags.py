"""Ordered, de-duplicated tag set used to override the Tags column."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List

LOGGER = logging.getLogger(__name__)

SUGGESTED_TAGS = ("Electronics", "Clothing", "Books", "Home & Garden", "Sports", "Toys")
TAG_SEPARATOR = ", "


class TagSet:
    """Insertion-ordered tags; adding an existing tag is a no-op."""

    def __init__(self, tags: Iterable[str] = ()) -> None:
        self._tags: List[str] = []
        for tag in tags:
            self.add(tag)

    def add(self, tag: str) -> bool:
        """Add ``tag`` (surrounding whitespace trimmed). Returns True if it was new."""

        tag = (tag or "").strip()
        if not tag or tag in self._tags:
            return False
        self._tags.append(tag)
        LOGGER.debug("Tag added: %s", tag)
        return True

    def remove(self, tag: str) -> bool:
        tag = (tag or "").strip()
        if tag not in self._tags:
            return False
        self._tags.remove(tag)
        LOGGER.debug("Tag removed: %s", tag)
        return True

    def joined(self) -> str:
        return TAG_SEPARATOR.join(self._tags)

    def to_list(self) -> List[str]:
        return list(self._tags)

    def __bool__(self) -> bool:
        return bool(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tags))

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

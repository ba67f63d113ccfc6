"""Directory-like grouping of flat keys for navigation display."""

from __future__ import annotations

import dataclasses
from collections import defaultdict
from typing import Iterable

INDEX_PREFIX = "index"


@dataclasses.dataclass(frozen=True)
class KeyGroup:
    """One navigation section: a prefix and the filenames directly under it."""

    prefix: str
    filenames: tuple[str, ...]

    def keys(self) -> list[str]:
        """Full keys for the filenames in this group, in display order."""
        if not self.prefix:
            return list(self.filenames)
        return [f"{self.prefix}/{name}" for name in self.filenames]


def split_key(key: str) -> tuple[str, str]:
    """Split a key into ``(prefix, filename)`` at its last ``/``."""
    prefix, _, filename = key.rpartition("/")
    return prefix, filename


def _filename_order(filename: str) -> tuple[bool, str]:
    # False sorts before True, so index* names come first
    return (not filename.startswith(INDEX_PREFIX), filename)


def group_keys(keys: Iterable[str]) -> list[KeyGroup]:
    """Group keys by prefix.

    Groups are ordered by prefix; inside a group, filenames starting with
    ``index`` come first and everything is otherwise lexicographic. The
    result depends only on the set of keys, not on their order.
    """
    by_prefix: dict[str, set[str]] = defaultdict(set)
    for key in keys:
        prefix, filename = split_key(key)
        by_prefix[prefix].add(filename)

    return [
        KeyGroup(prefix=prefix, filenames=tuple(sorted(by_prefix[prefix], key=_filename_order)))
        for prefix in sorted(by_prefix)
    ]

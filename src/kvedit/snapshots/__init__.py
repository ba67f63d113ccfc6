"""Local write-behind snapshots of saved files."""

from __future__ import annotations

from kvedit.snapshots.cache import DEFAULT_MAX_ENTRIES, SnapshotCache, SnapshotEntry

__all__ = ["SnapshotCache", "SnapshotEntry", "DEFAULT_MAX_ENTRIES"]

"""Bounded directory of local save snapshots.

Every successful remote save drops a copy of the body into a local directory
as ``{epoch_ms}_{key with "/" replaced by "_"}``. Only the newest
``max_entries`` snapshots are kept. Files whose names do not start with a
digit run and an underscore are left alone and never counted.
"""

from __future__ import annotations

import dataclasses
import logging
import re
import time
from pathlib import Path

from kvedit.keys import sanitize_key

log = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 100

_SNAPSHOT_NAME = re.compile(r"^(\d+)_")


@dataclasses.dataclass(frozen=True)
class SnapshotEntry:
    """One snapshot file on disk."""

    name: str
    timestamp_ms: int
    path: Path

    @property
    def sanitized_key(self) -> str:
        return self.name.split("_", 1)[1]


def snapshot_name(key: str, timestamp_ms: int) -> str:
    return f"{timestamp_ms}_{sanitize_key(key)}"


class SnapshotCache:
    """Write-behind snapshot store, pruned oldest-first."""

    def __init__(self, directory: Path, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._dir = Path(directory)
        self._max_entries = max_entries

    @property
    def directory(self) -> Path:
        return self._dir

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def save(self, key: str, body: str, *, timestamp_ms: int | None = None) -> Path | None:
        """Write a snapshot of *body* and prune.

        Best-effort: filesystem and encoding errors are logged and swallowed
        so the caller's save never fails because of the local copy. Returns
        the snapshot path, or None when nothing was written.
        """
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            if timestamp_ms is None:
                timestamp_ms = time.time_ns() // 1_000_000
                # Two saves in the same millisecond must not share a file.
                while (self._dir / snapshot_name(key, timestamp_ms)).exists():
                    timestamp_ms += 1
            path = self._dir / snapshot_name(key, timestamp_ms)
            data = body.encode("utf-8")
            path.write_bytes(data)
            self.prune()
        except (OSError, ValueError) as e:
            log.warning("Local snapshot of %s failed: %s", key, e)
            return None
        log.debug("Snapshot of %s written to %s", key, path)
        return path

    def entries(self) -> list[SnapshotEntry]:
        """Snapshot files, oldest first."""
        if not self._dir.is_dir():
            return []
        found = []
        for path in self._dir.iterdir():
            if not path.is_file():
                continue
            match = _SNAPSHOT_NAME.match(path.name)
            if match:
                found.append(SnapshotEntry(name=path.name, timestamp_ms=int(match.group(1)), path=path))
        found.sort(key=lambda e: (e.timestamp_ms, e.name))
        return found

    def prune(self) -> list[str]:
        """Delete the oldest snapshots beyond ``max_entries``; returns deleted names."""
        entries = self.entries()
        excess = len(entries) - self._max_entries
        if excess <= 0:
            return []
        removed = []
        for entry in entries[:excess]:
            entry.path.unlink(missing_ok=True)
            removed.append(entry.name)
        log.debug("Pruned %d snapshot(s) from %s", len(removed), self._dir)
        return removed

    def latest(self, key: str) -> SnapshotEntry | None:
        """Newest snapshot for *key*.

        Matching is on the sanitized name, so ``a/b`` and ``a_b`` share
        snapshots.
        """
        sanitized = sanitize_key(key)
        matches = [e for e in self.entries() if e.sanitized_key == sanitized]
        return matches[-1] if matches else None

    def read(self, name: str) -> str:
        """Body of the snapshot called *name*. Raises FileNotFoundError if absent."""
        if not _SNAPSHOT_NAME.match(name) or "/" in name or "\\" in name:
            raise FileNotFoundError(f"Not a snapshot name: {name}")
        return (self._dir / name).read_text(encoding="utf-8")

"""In-memory object store, dict-backed, for tests."""

from __future__ import annotations

import logging
import threading

from kvedit.exceptions import ObjectNotFoundError

log = logging.getLogger(__name__)


class MemoryObjectStore:
    """Stores bodies in a plain dict; nothing touches disk."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._store: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def list_keys(self, prefix: str = "") -> list[str]:
        with self._lock:
            return sorted(k for k in self._store if k.startswith(prefix))

    def get(self, key: str) -> str:
        with self._lock:
            if key not in self._store:
                raise ObjectNotFoundError(key)
            return self._store[key]

    def put(self, key: str, body: str) -> None:
        with self._lock:
            self._store[key] = body
        log.debug("Saved %s to memory store", key)

    def put_if_absent(self, key: str, body: str) -> bool:
        with self._lock:
            if key in self._store:
                return False
            self._store[key] = body
        return True

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._store

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

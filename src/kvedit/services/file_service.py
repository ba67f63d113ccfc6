"""File operations over an object store: normalization, error mapping, move."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from kvedit.exceptions import (
    ConflictError,
    KVEditError,
    NotFoundError,
    ObjectNotFoundError,
    StoreError,
)
from kvedit.keys import normalize_key
from kvedit.store.protocols import IObjectStore

log = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate backend failures into the kvedit exception hierarchy."""
    try:
        yield
    except ObjectNotFoundError as e:
        raise NotFoundError(e.key) from e
    except KVEditError:
        raise
    except Exception as e:
        log.error("Store %s failed: %s", operation, e)
        raise StoreError(str(e)) from e


class FileService:
    """List, read, write, delete and move text files addressed by key."""

    def __init__(self, store: IObjectStore) -> None:
        self._store = store

    def list_keys(self, prefix: str = "") -> list[str]:
        """All keys starting with *prefix* (raw, not normalized)."""
        with _store_errors("list"):
            keys = self._store.list_keys()
        if prefix:
            keys = [k for k in keys if k.startswith(prefix)]
        return keys

    def read(self, key: str) -> str:
        key = normalize_key(key)
        with _store_errors("get"):
            return self._store.get(key)

    def write(self, key: str, body: str) -> str:
        """Create or overwrite *key*; returns the normalized key."""
        key = normalize_key(key)
        with _store_errors("put"):
            self._store.put(key, body)
        log.info("Saved %s (%d chars)", key, len(body))
        return key

    def remove(self, key: str) -> str:
        """Delete *key*. Deleting an absent key succeeds."""
        key = normalize_key(key)
        with _store_errors("delete"):
            self._store.delete(key)
        log.info("Deleted %s", key)
        return key

    def move(self, src_key: str, dst_key: str) -> tuple[str, str]:
        """Rename *src_key* to *dst_key*.

        The destination is created with a conditional write, so an existing
        destination is never overwritten. Source deletion happens afterwards
        and is not atomic with the write: if it fails both keys remain and a
        ``StoreError`` is raised.
        """
        src = normalize_key(src_key)
        dst = normalize_key(dst_key)

        with _store_errors("move"):
            if self._store.exists(dst):
                raise ConflictError(dst)
            body = self._store.get(src)
            if not self._store.put_if_absent(dst, body):
                raise ConflictError(dst)

        try:
            with _store_errors("move"):
                self._store.delete(src)
        except StoreError:
            log.error("Move %s -> %s left both keys in place: source delete failed", src, dst)
            raise

        log.info("Moved %s -> %s", src, dst)
        return src, dst

"""Local-directory object store: one file per key, slashes become directories."""

from __future__ import annotations

import logging
from pathlib import Path

from kvedit.exceptions import InvalidKeyError, ObjectNotFoundError

log = logging.getLogger(__name__)


class FileObjectStore:
    """Stores each key as a UTF-8 text file below *base_path*.

    ``docs/readme`` lives at ``<base_path>/docs/readme``. Keys must already
    be normalized; traversal segments are rejected upstream. Empty and
    ``.`` segments would alias another file or a directory, so they are
    rejected here.
    """

    def __init__(self, base_path: Path) -> None:
        self._base = Path(base_path)
        self._base.mkdir(parents=True, exist_ok=True)

    def _key_path(self, key: str) -> Path:
        if any(part in ("", ".") for part in key.split("/")):
            raise InvalidKeyError(f"Invalid key: {key!r} has an empty or '.' path segment")
        return self._base / key

    def list_keys(self, prefix: str = "") -> list[str]:
        keys = []
        for path in self._base.rglob("*"):
            if not path.is_file():
                continue
            key = path.relative_to(self._base).as_posix()
            if key.startswith(prefix):
                keys.append(key)
        return sorted(keys)

    def get(self, key: str) -> str:
        path = self._key_path(key)
        if not path.is_file():
            raise ObjectNotFoundError(key)
        return path.read_text(encoding="utf-8")

    def put(self, key: str, body: str) -> None:
        path = self._key_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        log.debug("Saved %s to %s", key, path)

    def put_if_absent(self, key: str, body: str) -> bool:
        path = self._key_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with path.open("x", encoding="utf-8") as fh:
                fh.write(body)
        except FileExistsError:
            return False
        return True

    def exists(self, key: str) -> bool:
        return self._key_path(key).is_file()

    def delete(self, key: str) -> None:
        path = self._key_path(key)
        if path.is_file():
            path.unlink()
            self._remove_empty_parents(path.parent)

    def _remove_empty_parents(self, directory: Path) -> None:
        # Directories only exist to hold keys; drop them once empty.
        while directory != self._base and directory.is_dir() and not any(directory.iterdir()):
            directory.rmdir()
            directory = directory.parent

"""Object store protocol: the contract every backend implements."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IObjectStore(Protocol):
    """Flat text object store (memory, local directory, S3, ...).

    Keys are already normalized by the caller.
    """

    def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys starting with *prefix*."""
        ...

    def get(self, key: str) -> str:
        """Return the body stored at *key*. Raises ObjectNotFoundError if absent."""
        ...

    def put(self, key: str, body: str) -> None:
        """Create or overwrite *key*."""
        ...

    def put_if_absent(self, key: str, body: str) -> bool:
        """Create *key* only if it does not exist. Returns False if it did."""
        ...

    def exists(self, key: str) -> bool:
        """Check whether *key* exists."""
        ...

    def delete(self, key: str) -> None:
        """Delete *key* (no-op if absent)."""
        ...

"""Object store fakes for failure-path tests."""

from __future__ import annotations

from kvedit.store.memory_backend import MemoryObjectStore


class BrokenStore(MemoryObjectStore):
    """Memory store whose chosen operations raise ``RuntimeError``."""

    def __init__(self, *failing: str, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.failing = set(failing)

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.failing:
            raise RuntimeError(f"{operation} exploded")

    def list_keys(self, prefix: str = "") -> list[str]:
        self._maybe_fail("list_keys")
        return super().list_keys(prefix)

    def get(self, key: str) -> str:
        self._maybe_fail("get")
        return super().get(key)

    def put(self, key: str, body: str) -> None:
        self._maybe_fail("put")
        super().put(key, body)

    def put_if_absent(self, key: str, body: str) -> bool:
        self._maybe_fail("put_if_absent")
        return super().put_if_absent(key, body)

    def exists(self, key: str) -> bool:
        self._maybe_fail("exists")
        return super().exists(key)

    def delete(self, key: str) -> None:
        self._maybe_fail("delete")
        super().delete(key)


class RacingStore(MemoryObjectStore):
    """Reports the destination as absent, but it appears before the write."""

    def __init__(self, racing_key: str, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self._racing_key = racing_key

    def exists(self, key: str) -> bool:
        if key == self._racing_key:
            super().put(key, "written by someone else")
            return False
        return super().exists(key)

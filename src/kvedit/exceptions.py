"""Exception hierarchy for kvedit."""


class KVEditError(Exception):
    """Base exception for all kvedit errors."""


class InvalidKeyError(KVEditError, ValueError):
    """Raised when a key fails normalization (empty or path traversal)."""


class InvalidBodyError(KVEditError, ValueError):
    """Raised when a request body is not UTF-8 text."""


class NotFoundError(KVEditError, KeyError):
    """Raised when a key does not exist in the store."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Not found: {self.key}"


class ObjectNotFoundError(NotFoundError):
    """Raised by object store backends for an absent key."""


class ConflictError(KVEditError):
    """Raised when a move destination already exists."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Conflict: {key} already exists")
        self.key = key


class StoreError(KVEditError):
    """Raised when the underlying object store fails."""


class UnauthorizedError(KVEditError):
    """Missing or mismatched credential."""


class ServerMisconfiguredError(KVEditError):
    """The server has no shared secret configured."""

"""Key normalization for store addressing."""

from __future__ import annotations

from kvedit.exceptions import InvalidKeyError


def normalize_key(key: str) -> str:
    """Return *key* without leading or trailing slashes.

    Raises ``InvalidKeyError`` for keys containing ``..`` or keys that are
    empty once the slashes are stripped.

    >>> normalize_key("/a/b/")
    'a/b'
    """
    if ".." in key:
        raise InvalidKeyError(f"Invalid key: {key!r} must not contain '..'")
    normalized = key.strip("/")
    if not normalized:
        raise InvalidKeyError(f"Invalid key: {key!r} is empty")
    return normalized


def sanitize_key(key: str) -> str:
    """Flatten a key into a single path component (``a/b`` -> ``a_b``)."""
    return key.replace("/", "_")

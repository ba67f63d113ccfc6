"""kvedit: a key-value text-file editor backed by object storage.

Typical usage::

    from kvedit import AppSettings, create_app, create_store

    app = create_app(AppSettings())

Client side::

    from kvedit import EditorSession, KVEditClient, SnapshotCache

    session = EditorSession(KVEditClient(base_url, token), SnapshotCache(path))
"""

from __future__ import annotations

from kvedit.api.app import create_app
from kvedit.client.api_client import APIError, KVEditClient
from kvedit.core.config import AppSettings
from kvedit.editor.session import EditorSession, LoadStatus
from kvedit.grouping import KeyGroup, group_keys
from kvedit.keys import normalize_key
from kvedit.services.file_service import FileService
from kvedit.snapshots.cache import SnapshotCache
from kvedit.store import create_store

__all__ = [
    "AppSettings",
    "create_app",
    "create_store",
    "FileService",
    "normalize_key",
    "group_keys",
    "KeyGroup",
    "SnapshotCache",
    "KVEditClient",
    "APIError",
    "EditorSession",
    "LoadStatus",
]

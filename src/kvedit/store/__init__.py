"""Pluggable object store backends: factory + implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kvedit.store.file_backend import FileObjectStore
from kvedit.store.memory_backend import MemoryObjectStore
from kvedit.store.protocols import IObjectStore

if TYPE_CHECKING:
    from kvedit.core.config import StoreConfig

__all__ = [
    "IObjectStore",
    "FileObjectStore",
    "MemoryObjectStore",
    "create_store",
]


def create_store(config: StoreConfig) -> IObjectStore:
    """Create the object store selected by ``config.backend``."""
    backend = config.backend
    if backend == "memory":
        return MemoryObjectStore()
    elif backend == "file":
        return FileObjectStore(config.path)
    elif backend == "s3":
        from kvedit.store.s3_backend import S3ObjectStore

        return S3ObjectStore(
            bucket=config.s3_bucket,
            prefix=config.s3_prefix,
            endpoint_url=config.s3_endpoint_url,
            region=config.s3_region,
            access_key_id=config.s3_access_key_id,
            secret_access_key=config.s3_secret_access_key,
        )
    else:
        raise ValueError(f"Unknown store backend: {backend!r}")

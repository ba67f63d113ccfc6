"""Nested pydantic-settings configuration for the application.

Each group reads its own ``KVEDIT_<GROUP>_*`` env vars::

    export KVEDIT_STORE_BACKEND=s3
    export KVEDIT_STORE_S3_BUCKET=notes
    export KVEDIT_AUTH_TOKEN=change-me
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class StoreConfig(BaseSettings):
    """Object store configuration.

    Env vars use ``KVEDIT_STORE_`` prefix. The ``s3`` backend talks to any
    S3-compatible service; set ``s3_endpoint_url`` for R2 or MinIO.
    """

    model_config = {"env_prefix": "KVEDIT_STORE_"}

    backend: Literal["file", "s3", "memory"] = "file"
    path: Path = Path("./data")
    s3_bucket: str = ""
    s3_prefix: str = ""
    s3_endpoint_url: str = ""
    s3_region: str = "auto"
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""


class AuthConfig(BaseSettings):
    """Shared-secret authentication.

    Env vars use ``KVEDIT_AUTH_`` prefix. An empty ``token`` makes every
    ``/api`` request fail with 500.
    """

    model_config = {"env_prefix": "KVEDIT_AUTH_"}

    token: str = ""
    cookie_secure: bool = True


class APIConfig(BaseSettings):
    """HTTP server configuration.

    Env vars use ``KVEDIT_API_`` prefix.
    """

    model_config = {"env_prefix": "KVEDIT_API_"}

    title: str = "kvedit"
    description: str = "Key-value text file editor over object storage"
    host: str = "127.0.0.1"
    port: int = Field(default=8787, ge=1, le=65535)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``KVEDIT_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "KVEDIT_OBSERVABILITY_"}

    log_level: str = "INFO"


class ClientConfig(BaseSettings):
    """Editor client configuration.

    Env vars use ``KVEDIT_CLIENT_`` prefix::

        export KVEDIT_CLIENT_BASE_URL=https://notes.example.com
        export KVEDIT_CLIENT_TOKEN=change-me
    """

    model_config = {"env_prefix": "KVEDIT_CLIENT_"}

    base_url: str = "http://127.0.0.1:8787"
    token: str = ""
    timeout: float = 30.0
    snapshot_dir: Path = Path.home() / ".kvedit" / "files"
    snapshot_max_entries: int = Field(default=100, ge=1)


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs.

    Each sub-config reads its own ``KVEDIT_<GROUP>_*`` env vars.
    """

    model_config = {"env_prefix": "KVEDIT_"}

    store: StoreConfig = StoreConfig()
    auth: AuthConfig = AuthConfig()
    api: APIConfig = APIConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
    client: ClientConfig = ClientConfig()

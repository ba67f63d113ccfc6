"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kvedit.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_store(settings)
    _check_auth(settings)


def _check_store(settings: AppSettings) -> None:
    """Require a bucket for S3; warn about non-durable stores in containers."""
    if settings.store.backend == "s3" and not settings.store.s3_bucket:
        raise ValueError(
            "KVEDIT_STORE_BACKEND=s3 requires KVEDIT_STORE_S3_BUCKET to be set."
        )

    is_container = bool(
        os.environ.get("ECS_CONTAINER_METADATA_URI")
        or os.environ.get("KUBERNETES_SERVICE_HOST")
    )
    if is_container and settings.store.backend in ("file", "memory"):
        log.warning(
            "KVEDIT_STORE_BACKEND=%s in a container environment. "
            "Files will be lost on container restart. Consider KVEDIT_STORE_BACKEND=s3.",
            settings.store.backend,
        )


def _check_auth(settings: AppSettings) -> None:
    """Warn when no shared secret is set: every /api request would return 500."""
    if not settings.auth.token:
        log.warning(
            "KVEDIT_AUTH_TOKEN is not set. All /api requests will fail with 500 "
            "until a token is configured."
        )

"""S3-compatible object store: AWS S3, Cloudflare R2, MinIO."""

from __future__ import annotations

import logging
from typing import Any

import boto3
import botocore.exceptions

from kvedit.exceptions import ObjectNotFoundError

log = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "404", "NotFound"})
_PRECONDITION_CODES = frozenset({"PreconditionFailed", "412", "ConditionalRequestConflict"})


class S3ObjectStore:
    """Stores each key as a text object in a bucket, under an optional prefix.

    Args:
        bucket: Bucket name.
        prefix: Key prefix for all objects (e.g. ``notes/``).
        endpoint_url: Custom endpoint for S3-compatible services.
        region: Region name (``auto`` for R2).
        access_key_id: Access key; falls back to the default credential chain.
        secret_access_key: Secret key.
        client: Pre-built boto3 S3 client (overrides the connection args).
    """

    def __init__(
        self,
        bucket: str,
        prefix: str = "",
        endpoint_url: str = "",
        region: str = "auto",
        access_key_id: str = "",
        secret_access_key: str = "",
        client: Any | None = None,
    ) -> None:
        if client is None:
            kwargs: dict[str, Any] = {"region_name": region}
            if endpoint_url:
                kwargs["endpoint_url"] = endpoint_url
            if access_key_id:
                kwargs["aws_access_key_id"] = access_key_id
            if secret_access_key:
                kwargs["aws_secret_access_key"] = secret_access_key
            client = boto3.client("s3", **kwargs)

        self._s3 = client
        self._bucket = bucket
        self._prefix = prefix.rstrip("/") + "/" if prefix else ""

    def _full_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def list_keys(self, prefix: str = "") -> list[str]:
        paginator = self._s3.get_paginator("list_objects_v2")
        keys = []
        for page in paginator.paginate(Bucket=self._bucket, Prefix=self._full_key(prefix)):
            for obj in page.get("Contents", []):
                keys.append(obj["Key"][len(self._prefix):])
        return sorted(keys)

    def get(self, key: str) -> str:
        try:
            response = self._s3.get_object(Bucket=self._bucket, Key=self._full_key(key))
        except botocore.exceptions.ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(key) from e
            raise
        return response["Body"].read().decode("utf-8")

    def put(self, key: str, body: str) -> None:
        self._s3.put_object(
            Bucket=self._bucket,
            Key=self._full_key(key),
            Body=body.encode("utf-8"),
            ContentType="text/plain; charset=utf-8",
        )
        log.debug("Saved %s to s3://%s/%s", key, self._bucket, self._full_key(key))

    def put_if_absent(self, key: str, body: str) -> bool:
        try:
            self._s3.put_object(
                Bucket=self._bucket,
                Key=self._full_key(key),
                Body=body.encode("utf-8"),
                ContentType="text/plain; charset=utf-8",
                IfNoneMatch="*",
            )
        except botocore.exceptions.ClientError as e:
            if _error_code(e) in _PRECONDITION_CODES:
                return False
            raise
        return True

    def exists(self, key: str) -> bool:
        try:
            self._s3.head_object(Bucket=self._bucket, Key=self._full_key(key))
        except botocore.exceptions.ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES:
                return False
            raise
        return True

    def delete(self, key: str) -> None:
        self._s3.delete_object(Bucket=self._bucket, Key=self._full_key(key))


def _error_code(error: botocore.exceptions.ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))

"""Synchronous httpx client mirroring the editor's REST calls."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from kvedit.exceptions import KVEditError

log = logging.getLogger(__name__)


class APIError(KVEditError):
    """A request to the API failed.

    ``operation`` names the client call (``listKeys``, ``getKey``, ...) so
    callers can report which step failed.
    """

    def __init__(self, operation: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"[{operation}] {message}")
        self.operation = operation
        self.message = message
        self.status_code = status_code


def _quote_key(key: str) -> str:
    return quote(key, safe="/")


class KVEditClient:
    """Calls the ``/api`` routes with the shared token in the Authorization header.

    Args:
        base_url: Server root, e.g. ``https://notes.example.com``.
        token: Shared secret; omitted from requests when empty.
        timeout: Per-request timeout in seconds.
        http: Pre-built ``httpx.Client`` (a FastAPI ``TestClient`` works too).
    """

    def __init__(
        self,
        base_url: str = "",
        token: str = "",
        timeout: float = 30.0,
        http: httpx.Client | None = None,
    ) -> None:
        headers = {"Authorization": token} if token else {}
        if http is None:
            http = httpx.Client(base_url=base_url, timeout=timeout)
        self._http = http
        self._headers = headers

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> KVEditClient:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _request(self, operation: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        headers = {**self._headers, **kwargs.pop("headers", {})}
        try:
            response = self._http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise APIError(operation, str(e)) from e
        if response.is_error:
            log.debug("%s %s -> %d", method, url, response.status_code)
            raise APIError(operation, response.text, status_code=response.status_code)
        return response

    def list_keys(self, prefix: str = "") -> list[str]:
        response = self._request("listKeys", "GET", f"/api/lists/{_quote_key(prefix)}")
        return list(response.json())

    def get(self, key: str) -> str:
        return self._request("getKey", "GET", f"/api/files/{_quote_key(key)}").text

    def upsert(self, key: str, body: str) -> None:
        self._request(
            "upsertKey",
            "PUT",
            f"/api/files/{_quote_key(key)}",
            content=body.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )

    def delete(self, key: str) -> None:
        self._request("deleteKey", "DELETE", f"/api/files/{_quote_key(key)}")

    def move(self, src_key: str, dst_key: str) -> None:
        self._request("mvKey", "POST", "/api/mv", json={"srcKey": src_key, "dstKey": dst_key})

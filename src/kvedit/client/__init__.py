"""HTTP client for the kvedit API."""

from __future__ import annotations

from kvedit.client.api_client import APIError, KVEditClient

__all__ = ["KVEditClient", "APIError"]

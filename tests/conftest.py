"""Shared fixtures for kvedit tests."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from kvedit.api.app import create_app
from kvedit.client.api_client import KVEditClient
from kvedit.core.config import AppSettings, AuthConfig, StoreConfig
from kvedit.store.memory_backend import MemoryObjectStore

TOKEN = "test-secret"


@pytest.fixture
def settings() -> AppSettings:
    """Memory store, known token, cookies allowed over plain HTTP."""
    return AppSettings(
        store=StoreConfig(backend="memory"),
        auth=AuthConfig(token=TOKEN, cookie_secure=False),
    )


@pytest.fixture
def store() -> MemoryObjectStore:
    return MemoryObjectStore()


@pytest.fixture
def app(settings: AppSettings, store: MemoryObjectStore) -> FastAPI:
    return create_app(settings, store=store)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Authenticated test client (Authorization header)."""
    with TestClient(app, headers={"Authorization": TOKEN}) as test_client:
        yield test_client


@pytest.fixture
def api_client(app: FastAPI) -> Iterator[KVEditClient]:
    """KVEditClient talking to the app in-process."""
    with TestClient(app) as test_client:
        yield KVEditClient(token=TOKEN, http=test_client)

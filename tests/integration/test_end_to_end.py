"""End-to-end scenarios over HTTP, from raw requests to the editor session."""

from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from kvedit.api.app import create_app
from kvedit.client.api_client import KVEditClient
from kvedit.core.config import AppSettings, AuthConfig, StoreConfig
from kvedit.editor.session import EditorSession, LoadStatus
from kvedit.snapshots.cache import SnapshotCache


def test_put_get_move_scenario(client: TestClient) -> None:
    assert client.put("/api/files/docs/readme", content="hello").status_code == 201

    resp = client.get("/api/files/docs/readme")
    assert resp.status_code == 200
    assert resp.text == "hello"

    resp = client.post("/api/mv", json={"srcKey": "docs/readme", "dstKey": "docs/readme2"})
    assert resp.status_code == 200

    assert client.get("/api/files/docs/readme").status_code == 404
    resp = client.get("/api/files/docs/readme2")
    assert resp.status_code == 200
    assert resp.text == "hello"


def test_move_onto_existing_key_changes_nothing(client: TestClient) -> None:
    client.put("/api/files/a", content="A")
    client.put("/api/files/b", content="B")

    assert client.post("/api/mv", json={"srcKey": "a", "dstKey": "b"}).status_code == 409
    assert client.get("/api/files/a").text == "A"
    assert client.get("/api/files/b").text == "B"
    assert sorted(client.get("/api/lists/").json()) == ["a", "b"]


def test_editor_session_against_file_store(tmp_path: Path) -> None:
    settings = AppSettings(
        store=StoreConfig(backend="file", path=tmp_path / "data"),
        auth=AuthConfig(token="e2e", cookie_secure=False),
    )
    with TestClient(create_app(settings)) as http:
        session = EditorSession(
            KVEditClient(token="e2e", http=http),
            SnapshotCache(tmp_path / "snapshots", max_entries=3),
        )
        session.bootstrap()
        assert session.keys == []

        session.select("notes/index.md")
        assert session.status is LoadStatus.FAILED
        for n in range(5):
            session.edit(f"draft {n}")
            assert session.handle_shortcut("s", ctrl=True)
        assert session.keys == ["notes/index.md"]
        assert (tmp_path / "data" / "notes" / "index.md").read_text(encoding="utf-8") == "draft 4"
        assert len(SnapshotCache(tmp_path / "snapshots").entries()) == 3

        session.rename("notes/today.md")
        assert session.keys == ["notes/today.md"]
        assert session.body == "draft 4"

        session.delete(lambda: True)
        assert session.keys == []
        assert session.status is LoadStatus.IDLE
        assert not (tmp_path / "data" / "notes").exists()

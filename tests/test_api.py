"""
End-to-end tests for the standing HTTP server (FastAPI TestClient).
"""
from __future__ import annotations

import json
import sys
from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from iwd.app import create_app
from iwd.core.config import MODE_SERVER, Settings
from iwd.repositories.collection_store import CollectionStore, Reason, WriteResult


def _settings(tmp_path: Path, **overrides) -> Settings:
    values = dict(
        app_env="test",
        mode=MODE_SERVER,
        data_dir=tmp_path / "data",
        static_dir=tmp_path / "public",
        host="127.0.0.1",
        port=3000,
        log_level="WARNING",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def settings(tmp_path):
    return _settings(tmp_path)


@pytest.fixture()
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def test_startup_initializes_collection_files(client, settings):
    for name in ("wishes", "pledges", "nominations", "postcards"):
        assert (settings.data_dir / f"{name}.json").exists()


def test_startup_repairs_corrupt_file(tmp_path):
    settings = _settings(tmp_path)
    settings.data_dir.mkdir(parents=True)
    (settings.data_dir / "wishes.json").write_text("{broken", encoding="utf-8")
    with TestClient(create_app(settings)):
        pass
    stored = json.loads((settings.data_dir / "wishes.json").read_text(encoding="utf-8"))
    assert len(stored) == 3


def test_get_returns_seeded_wishes(client):
    response = client.get("/api/wishes")
    assert response.status_code == 200
    assert len(response.json()) == 3


def test_post_wish_then_list_includes_it(client):
    response = client.post("/api/wishes", json={"message": "Hello"})
    assert response.status_code == 201
    created = response.json()
    assert created["message"] == "Hello"
    assert isinstance(created["id"], int)
    datetime.fromisoformat(created["date"].replace("Z", "+00:00"))

    listed = client.get("/api/wishes").json()
    assert created in listed


def test_post_wish_with_empty_body_is_rejected_without_write(client, settings):
    before = client.get("/api/wishes").json()
    raw_before = (settings.data_dir / "wishes.json").read_bytes()

    response = client.post("/api/wishes", content=b"")
    assert response.status_code == 400
    assert "error" in response.json()

    assert client.get("/api/wishes").json() == before
    assert (settings.data_dir / "wishes.json").read_bytes() == raw_before


def test_post_with_malformed_json_is_rejected(client):
    response = client.post(
        "/api/postcards", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400


def test_post_pledge_returns_total(client):
    response = client.post("/api/pledges", json={"pledgeId": "amplify", "text": "Amplify Women's Voices"})
    assert response.status_code == 201
    body = response.json()
    assert body["totalPledges"] == 84
    assert body["pledge"]["pledgeId"] == "amplify"


def test_post_pledge_requires_both_fields(client):
    response = client.post("/api/pledges", json={"pledgeId": "amplify"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: text"}


def test_nomination_posted_twice_is_stored_once(client):
    payload = {"id": "nominated-42", "name": "Grace Hopper", "achievement": "COBOL"}
    assert client.post("/api/nominations", json=payload).status_code == 201
    payload["achievement"] = "Compilers"
    second = client.post("/api/nominations", json=payload)
    assert second.status_code == 201

    stored = [n for n in client.get("/api/nominations").json() if n["id"] == "nominated-42"]
    assert len(stored) == 1
    assert stored[0]["achievement"] == "Compilers"


@pytest.mark.parametrize("body", [{"id": "n1"}, {"id": "n1", "name": "Frida Kahlo"}])
def test_nomination_with_only_an_id_is_stored_once(client, body):
    first = client.post("/api/nominations", json=body)
    second = client.post("/api/nominations", json=body)
    assert (first.status_code, second.status_code) == (201, 201)
    stored = [n for n in client.get("/api/nominations").json() if n["id"] == "n1"]
    assert len(stored) == 1


def test_post_postcard(client):
    response = client.post("/api/postcards", json={"greeting": "Dear Grandma", "message": "You inspire me"})
    assert response.status_code == 201
    assert response.json()["greeting"] == "Dear Grandma"


@pytest.mark.parametrize("method", ["put", "delete", "patch"])
def test_other_methods_are_not_allowed(client, method):
    response = getattr(client, method)("/api/wishes")
    assert response.status_code == 405
    assert "error" in response.json()


def test_unknown_collection_is_not_found(client):
    response = client.get("/api/guestbook")
    assert response.status_code == 404
    assert response.json() == {"error": "Collection not found"}


def test_write_failure_returns_500(settings, monkeypatch):
    store = CollectionStore(settings.store_config())
    monkeypatch.setattr(
        store,
        "write",
        lambda name, records: WriteResult(ok=False, reason=Reason.WRITE_FAILED, error="disk full"),
    )
    with TestClient(create_app(settings, store=store)) as client:
        response = client.post("/api/wishes", json={"message": "Hello"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to save wish"}


def test_static_site_is_served(tmp_path):
    settings = _settings(tmp_path)
    settings.static_dir.mkdir()
    (settings.static_dir / "index.html").write_text("<h1>Happy Women's Day</h1>", encoding="utf-8")
    with TestClient(create_app(settings)) as client:
        page = client.get("/")
        assert page.status_code == 200
        assert "Happy Women's Day" in page.text
        assert client.get("/api/wishes").status_code == 200
        assert client.get("/favicon.ico").status_code == 204


def test_cors_allows_any_origin(client):
    response = client.get("/api/wishes", headers={"Origin": "https://example.org"})
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize(
    "body",
    [
        b'{"message": NaN}',
        b'{"message": "hi", "score": Infinity}',
        b'{"message": "hi", "score": -Infinity}',
        b"[" * 200_000,
        b'["message"]',
    ],
)
def test_unparseable_or_non_object_body_is_rejected(client, settings, body):
    raw_before = (settings.data_dir / "wishes.json").read_bytes()
    response = client.post("/api/wishes", content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert "error" in response.json()
    assert (settings.data_dir / "wishes.json").read_bytes() == raw_before
    assert client.get("/api/wishes").status_code == 200

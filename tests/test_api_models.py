from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from thirdspace.adapters import sql_repo
from thirdspace.api.http import app, get_model_repo
from thirdspace.domain.assumptions import AssumptionSet


@pytest.fixture
def ticking_clock(monkeypatch):
    """Strictly increasing timestamps so ordering never ties."""
    state = {"now": datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)}

    def _tick():
        state["now"] += timedelta(seconds=1)
        return state["now"]

    monkeypatch.setattr(sql_repo, "_utcnow", _tick)
    return state


def test_create_returns_summary_without_data(repo_client):
    r = repo_client.post("/api/models", json={"name": "Base Case", "data": {"studentFee": 65}})
    assert r.status_code == 200, r.text
    body = r.json()
    assert set(body) == {"id", "name", "created_at", "updated_at"}
    assert body["name"] == "Base Case"
    assert body["created_at"] == body["updated_at"]


def test_get_returns_full_record(repo_client):
    created = repo_client.post("/api/models", json={"name": "Q1", "data": {"rent": 3000}}).json()

    r = repo_client.get(f"/api/models/{created['id']}")
    assert r.status_code == 200
    rec = r.json()
    assert rec["id"] == created["id"]
    assert rec["name"] == "Q1"
    assert rec["data"] == {"rent": 3000}
    assert "created_at" in rec and "updated_at" in rec


def test_data_is_stored_as_opaque_json(repo_client):
    odd = {"studentFee": "not a number", "nested": {"a": [1, 2, None]}, "flag": True}
    created = repo_client.post("/api/models", json={"name": "odd", "data": odd}).json()
    assert repo_client.get(f"/api/models/{created['id']}").json()["data"] == odd


def test_list_is_newest_updated_first(repo_client, ticking_clock):
    a = repo_client.post("/api/models", json={"name": "a", "data": {}}).json()
    b = repo_client.post("/api/models", json={"name": "b", "data": {}}).json()

    names = [m["name"] for m in repo_client.get("/api/models").json()]
    assert names == ["b", "a"]

    repo_client.put(f"/api/models/{a['id']}", json={"name": "a2", "data": {"rent": 1}})
    listing = repo_client.get("/api/models").json()
    assert [m["name"] for m in listing] == ["a2", "b"]
    assert all("data" not in m for m in listing)
    assert b["id"] in {m["id"] for m in listing}


def test_update_replaces_name_and_data_and_keeps_created_at(repo_client, ticking_clock):
    created = repo_client.post("/api/models", json={"name": "v1", "data": {"rent": 1, "misc": 2}}).json()

    r = repo_client.put(f"/api/models/{created['id']}", json={"name": "v2", "data": {"rent": 5}})
    assert r.status_code == 200
    updated = r.json()
    assert updated["name"] == "v2"
    assert updated["created_at"] == created["created_at"]
    assert updated["updated_at"] > created["updated_at"]

    rec = repo_client.get(f"/api/models/{created['id']}").json()
    # full replacement, not a merge
    assert rec["data"] == {"rent": 5}


def test_repository_writes_with_the_real_utc_clock(repo):
    assert sql_repo._utcnow().tzinfo is timezone.utc

    created = repo.create("clock", {"rent": 1})
    updated = repo.update(created["id"], "clock", {"rent": 2})

    assert updated is not None
    assert updated["updated_at"] >= created["updated_at"]
    assert repo.get(created["id"])["data"] == {"rent": 2}


def test_delete_then_get_is_not_found(repo_client):
    created = repo_client.post("/api/models", json={"name": "tmp", "data": {}}).json()

    r = repo_client.delete(f"/api/models/{created['id']}")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    r = repo_client.get(f"/api/models/{created['id']}")
    assert r.status_code == 404
    assert r.json() == {"error": "Model not found"}


@pytest.mark.parametrize(
    "method, path, body",
    [
        ("get", "/api/models/9999", None),
        ("put", "/api/models/9999", {"name": "x", "data": {}}),
        ("delete", "/api/models/9999", None),
        ("get", "/api/models/9999/projection", None),
    ],
)
def test_missing_id_is_404_not_success(repo_client, method, path, body):
    kwargs = {"json": body} if body is not None else {}
    r = getattr(repo_client, method)(path, **kwargs)
    assert r.status_code == 404
    assert r.json() == {"error": "Model not found"}
    assert "success" not in r.json()


def test_missing_name_is_rejected(repo_client):
    r = repo_client.post("/api/models", json={"data": {}})
    assert r.status_code == 422


def test_save_and_load_round_trip_matches_original(repo_client):
    original = AssumptionSet().replace(student_fee=72, rent=3100, conversion_rate=0.02)
    created = repo_client.post("/api/models", json={"name": "rt", "data": original.to_payload()}).json()

    loaded = repo_client.get(f"/api/models/{created['id']}").json()["data"]
    assert AssumptionSet().merged(loaded) == original


def test_loading_partial_payload_keeps_current_values(repo_client):
    created = repo_client.post("/api/models", json={"name": "partial", "data": {"studentFee": 80}}).json()
    loaded = repo_client.get(f"/api/models/{created['id']}").json()["data"]

    editing = AssumptionSet().replace(rent=4000)
    after = editing.merged(loaded)
    assert after.student_fee == 80
    assert after.rent == 4000


class _BrokenRepo:
    def list_summaries(self, limit=None):
        raise RuntimeError("db down")

    def get(self, model_id):
        raise RuntimeError("db down")

    def create(self, name, data):
        raise RuntimeError("db down")

    def update(self, model_id, name, data):
        raise RuntimeError("db down")

    def delete(self, model_id):
        raise RuntimeError("db down")


@pytest.fixture
def broken_client():
    app.dependency_overrides[get_model_repo] = lambda: _BrokenRepo()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_model_repo, None)


@pytest.mark.parametrize(
    "method, path, body, message",
    [
        ("get", "/api/models", None, "Failed to fetch models"),
        ("get", "/api/models/1", None, "Failed to fetch model"),
        ("post", "/api/models", {"name": "x", "data": {}}, "Failed to save model"),
        ("put", "/api/models/1", {"name": "x", "data": {}}, "Failed to update model"),
        ("delete", "/api/models/1", None, "Failed to delete model"),
    ],
)
def test_storage_failure_is_500_with_error(broken_client, method, path, body, message):
    kwargs = {"json": body} if body is not None else {}
    r = getattr(broken_client, method)(path, **kwargs)
    assert r.status_code == 500
    assert r.json() == {"error": message}


def test_session_client_uses_configured_database(client):
    # module-level repository against the THIRDSPACE_DB_URI set in conftest
    r = client.post("/api/models", json={"name": "smoke", "data": {"rent": 1}})
    assert r.status_code == 200
    ids = [m["id"] for m in client.get("/api/models").json()]
    assert r.json()["id"] in ids

"""
Alembic web API tests (FastAPI TestClient).
"""
import pytest
from fastapi.testclient import TestClient

from apps.alembic.app import create_app


@pytest.fixture
def client(catalog_path):
    return TestClient(create_app(catalog_path, max_sessions=4))


@pytest.fixture
def sid(client):
    r = client.post("/api/v1/sessions")
    assert r.status_code == 201
    return r.json()["id"]


class TestMeta:

    def test_healthz(self, client):
        assert client.get("/healthz").json() == {"ok": True}

    def test_index_page(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert "Arcadia Alchemy Lab" in r.text

    def test_index_page_writes_params_back_on_change_only(self, client):
        html = client.get("/").text
        assert "addEventListener('input', () => pushParams(false))" in html
        assert "addEventListener('change', () => pushParams(true))" in html

    def test_meta(self, client):
        m = client.get("/api/v1/meta").json()
        assert m["catalog"]["count"] == 20
        assert m["slots"] == 3
        assert m["project_version"] == "0.3.0"
        assert "catalog_version" not in m
        assert {"min_level": 100, "rank": "Master"} in m["ranks"]


class TestIngredients:

    def test_list_all(self, client):
        data = client.get("/api/v1/ingredients").json()
        assert data["count"] == data["total"] == 20

    def test_search(self, client):
        data = client.get("/api/v1/ingredients", params={"q": "wheat"}).json()
        assert [i["name"] for i in data["items"]] == ["Wheat"]

    def test_empty_catalog(self, tmp_path):
        c = TestClient(create_app(tmp_path / "missing.json"))
        assert c.get("/api/v1/ingredients").json()["count"] == 0
        r = c.post("/api/v1/evaluate", json={"ingredients": []})
        assert r.json()["result"]["kind"] == "no_potion"


class TestEvaluate:

    def test_success(self, client):
        r = client.post("/api/v1/evaluate", json={"ingredients": ["Blue Mountain Flower", "Wheat"], "level": 100, "perks": 5})
        body = r.json()
        assert r.status_code == 200
        assert body["rank"] == "Master"
        assert body["result"]["kind"] == "success"
        assert body["result"]["multiplier_display"] == 5.0
        # (2 + 5) * 2 * 5.0
        assert body["result"]["total_value"] == 70
        assert [e["magnitude"] for e in body["result"]["effects"]] == [75, 75]

    def test_params_are_parsed_and_clamped(self, client):
        body = client.post("/api/v1/evaluate", json={"ingredients": [], "level": "0", "perks": "abc"}).json()
        assert body["params"] == {"level": 1, "perks": 0}

    def test_duplicate_is_conflict(self, client):
        r = client.post("/api/v1/evaluate", json={"ingredients": ["Wheat", "wheat"]})
        assert r.status_code == 409
        assert r.json()["detail"]["error"] == "DuplicateIngredient"

    def test_too_many_is_conflict(self, client):
        r = client.post("/api/v1/evaluate", json={"ingredients": ["Wheat", "Garlic", "Lavender", "Salt Pile"]})
        assert r.status_code == 409
        assert r.json()["detail"]["error"] == "SlotsFull"

    def test_unknown_ingredient(self, client):
        r = client.post("/api/v1/evaluate", json={"ingredients": ["Dragon Scale"]})
        assert r.status_code == 404


class TestSessions:

    def test_create_with_params(self, client):
        body = client.post("/api/v1/sessions", json={"level": 60, "perks": 1}).json()
        assert body["params"] == {"level": 60, "perks": 1}
        assert body["rank"] == "Adept"
        assert body["slots"] == [None, None, None]

    def test_add_remove_flow(self, client, sid):
        r = client.post(f"/api/v1/sessions/{sid}/slots", json={"name": "Nightshade"})
        assert r.json()["slot"] == 0
        r = client.post(f"/api/v1/sessions/{sid}/slots", json={"name": "Deathbell"})
        body = r.json()
        assert body["slot"] == 1
        assert body["result"]["display_name"] == "Poison of Damage Health"
        assert body["result"]["is_poison"] is True

        r = client.delete(f"/api/v1/sessions/{sid}/slots/0")
        assert r.json()["result"]["kind"] == "no_potion"
        r = client.post(f"/api/v1/sessions/{sid}/slots", json={"name": "Imp Stool"})
        assert r.json()["slot"] == 0

    def test_slot_errors(self, client, sid):
        for name in ("Wheat", "Garlic", "Lavender"):
            assert client.post(f"/api/v1/sessions/{sid}/slots", json={"name": name}).status_code == 200
        r = client.post(f"/api/v1/sessions/{sid}/slots", json={"name": "Salt Pile"})
        assert r.status_code == 409
        assert r.json()["detail"]["message"] == "All slots are full!"

        client.delete(f"/api/v1/sessions/{sid}/slots/2")
        r = client.post(f"/api/v1/sessions/{sid}/slots", json={"name": "Wheat"})
        assert r.status_code == 409
        assert r.json()["detail"]["error"] == "DuplicateIngredient"

        assert client.delete(f"/api/v1/sessions/{sid}/slots/3").status_code == 400
        assert client.post(f"/api/v1/sessions/{sid}/slots", json={"name": "Nope"}).status_code == 404

    def test_params_and_clear(self, client, sid):
        client.post(f"/api/v1/sessions/{sid}/slots", json={"name": "Blue Mountain Flower"})
        client.post(f"/api/v1/sessions/{sid}/slots", json={"name": "Wheat"})
        body = client.put(f"/api/v1/sessions/{sid}/params", json={"level": 101, "perks": 5}).json()
        assert body["params"] == {"level": 100, "perks": 5}
        assert body["result"]["multiplier"] == 5.0

        body = client.post(f"/api/v1/sessions/{sid}/clear").json()
        assert body["slots"] == [None, None, None]
        assert body["params"] == {"level": 100, "perks": 5}

    def test_blank_params_keep_current(self, client, sid):
        client.put(f"/api/v1/sessions/{sid}/params", json={"level": 40, "perks": 2})
        body = client.put(f"/api/v1/sessions/{sid}/params", json={"level": "", "perks": "2"}).json()
        assert body["params"] == {"level": 40, "perks": 2}

    def test_unknown_and_dropped_session(self, client, sid):
        assert client.get("/api/v1/sessions/nope").status_code == 404
        assert client.delete(f"/api/v1/sessions/{sid}").json() == {"ok": True, "id": sid}
        assert client.get(f"/api/v1/sessions/{sid}").status_code == 404

    def test_oldest_session_is_evicted(self, client, sid):
        for _ in range(4):
            client.post("/api/v1/sessions")
        assert client.get(f"/api/v1/sessions/{sid}").status_code == 404

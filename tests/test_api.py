"""
Tests for the HTTP API (health, config, catalog, game sessions)
"""
import json

import pytest
import yaml
from fastapi.testclient import TestClient

from towerguess.main import app


ANSWERS = {
    "/images/ToM.png": ["ToM", "Tower of Misery"],
    "/images/ToH.png": ["ToH", "Tower of Hecc"],
    "/images/PoM/WaT.jpg": ["WaT", "Was A Tower"],
}


@pytest.fixture
def client(tmp_path, monkeypatch):
    images = tmp_path / "images"
    (images / "PoM").mkdir(parents=True)
    for url in ANSWERS:
        (images / url[len("/images/"):]).write_bytes(b"\x89PNG")

    catalog_file = images / "towers.json"
    catalog_file.write_text(json.dumps({
        "defaultImages": [{"url": u, "answers": a} for u, a in ANSWERS.items() if "/PoM/" not in u],
        "pomImages": [{"url": "/images/PoM/WaT.jpg", "answers": ANSWERS["/images/PoM/WaT.jpg"]}],
    }), encoding="utf-8")

    config_file = tmp_path / "towerguess.yaml"
    config_file.write_text(yaml.safe_dump({
        "images_dir": str(images),
        "catalog_file": str(catalog_file),
        "high_score_file": str(tmp_path / "highscore.yaml"),
        "preload_timeout": 2,
    }), encoding="utf-8")
    monkeypatch.setenv("TOWERGUESS_CONFIG", str(config_file))

    with TestClient(app) as test_client:
        yield test_client


def new_session(client):
    response = client.post("/game/sessions")
    assert response.status_code == 200
    return response.json()


def test_health(client):
    body = client.get("/").json()
    assert body["status"] == "ok"
    assert body["default_images"] == 2
    assert body["pom_images"] == 1


def test_config_and_catalog(client):
    config = client.get("/config").json()
    assert config["pools"] == {"defaultImages": 2, "pomImages": 1}
    assert config["url_prefix"] == "/images"

    catalog = client.get("/catalog").json()
    assert [e["url"] for e in catalog["defaultImages"]] == ["/images/ToM.png", "/images/ToH.png"]


def test_new_session_waits_in_menu(client):
    body = new_session(client)
    assert body["state"] == "menu"
    assert body["default_count"] == 2
    assert body["image_url"] is None


def test_full_round(client):
    """Start, guess right, guess wrong, see the canonical answer"""
    session_id = new_session(client)["session_id"]

    started = client.post(f"/game/{session_id}/start").json()
    assert started["state"] == "playing"
    assert started["preload"]["loaded"] == 2

    url = started["image_url"]
    right = client.post(f"/game/{session_id}/guess", json={"guess": f"  {ANSWERS[url][1].lower()} "}).json()
    assert right["correct"] is True
    assert right["score"] == 1

    missed_url = right["image_url"]
    wrong = client.post(f"/game/{session_id}/guess", json={"guess": "not a tower"}).json()
    assert wrong["correct"] is False
    assert wrong["state"] == "game_over"
    assert wrong["correct_answer"] == ANSWERS[missed_url][0]
    assert wrong["high_score"] == 1

    restarted = client.post(f"/game/{session_id}/restart").json()
    assert restarted["state"] == "playing"
    assert restarted["score"] == 0


def test_bonus_toggle(client):
    session_id = new_session(client)["session_id"]
    body = client.post(f"/game/{session_id}/settings", json={"include_bonus": True}).json()
    assert body["include_bonus"] is True

    started = client.post(f"/game/{session_id}/start").json()
    assert started["pool_size"] == 3


def test_guess_from_menu_conflicts(client):
    session_id = new_session(client)["session_id"]
    response = client.post(f"/game/{session_id}/guess", json={"guess": "ToM"})
    assert response.status_code == 409
    assert response.json()["detail"]["state"] == "menu"


def test_back_to_menu(client):
    session_id = new_session(client)["session_id"]
    client.post(f"/game/{session_id}/start")
    body = client.post(f"/game/{session_id}/menu").json()
    assert body["state"] == "menu"
    assert body["pool_size"] == 0


def test_unknown_session(client):
    assert client.get("/game/nope").status_code == 404
    assert client.post("/game/nope/start").status_code == 404


def test_delete_session(client):
    session_id = new_session(client)["session_id"]
    assert client.delete(f"/game/{session_id}").status_code == 200
    assert client.get(f"/game/{session_id}").status_code == 404


def test_missing_guess_field(client):
    session_id = new_session(client)["session_id"]
    client.post(f"/game/{session_id}/start")
    assert client.post(f"/game/{session_id}/guess", json={}).status_code == 400


def test_missing_catalog_gives_empty_menu(tmp_path, monkeypatch):
    """A server without towers.json still starts; start is refused"""
    config_file = tmp_path / "towerguess.yaml"
    config_file.write_text(yaml.safe_dump({
        "images_dir": str(tmp_path / "images"),
        "catalog_file": str(tmp_path / "missing.json"),
        "high_score_file": str(tmp_path / "highscore.yaml"),
    }), encoding="utf-8")
    monkeypatch.setenv("TOWERGUESS_CONFIG", str(config_file))

    with TestClient(app) as client:
        session_id = new_session(client)["session_id"]
        response = client.post(f"/game/{session_id}/start")
        assert response.status_code == 400
        assert client.get(f"/game/{session_id}").json()["state"] == "menu"


def test_catalog_images_are_served(client):
    """Every catalog URL resolves on the same server"""
    catalog = client.get("/catalog").json()
    for entry in catalog["defaultImages"] + catalog["pomImages"]:
        response = client.get(entry["url"])
        assert response.status_code == 200, entry["url"]
        assert response.content == b"\x89PNG"


def test_catalog_json_is_served(client):
    response = client.get("/images/towers.json")
    assert response.status_code == 200
    assert len(response.json()["defaultImages"]) == 2


@pytest.mark.parametrize("value", ["false", 0, 1, "yes"])
def test_bonus_toggle_requires_boolean(client, value):
    """Strings and numbers are rejected instead of being coerced"""
    session_id = new_session(client)["session_id"]
    response = client.post(f"/game/{session_id}/settings", json={"include_bonus": value})
    assert response.status_code == 400
    assert client.get(f"/game/{session_id}").json()["include_bonus"] is False

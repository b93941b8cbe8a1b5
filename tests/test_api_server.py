from __future__ import annotations

from fastapi.testclient import TestClient
import pytest

from geocraft.core.game_manager import GameManager
from geocraft.server.api_server import create_api_app


@pytest.fixture
def client(store, catalog):
    for name, score in (("anna", 15), ("bert", 40)):
        store.register(name, "secret1")
        store.set_high_score(name, score)
    store.set_saved_session("anna", "type:Timed;mode:Global Mode")
    return TestClient(create_api_app(GameManager(store, catalog)))


def test_leaderboard_page(client):
    response = client.get("/leaderboard")
    assert response.status_code == 200
    payload = response.json()
    assert payload["page"] == 0
    assert [row["username"] for row in payload["rows"]] == ["bert", "anna"]
    assert payload["rows"][0] == {"rank": 1, "username": "bert", "high_score": 40}
    assert payload["has_previous"] is False
    assert payload["has_next"] is False
    assert payload["total_players"] == 2


def test_leaderboard_rejects_negative_page(client):
    assert client.get("/leaderboard", params={"page": -1}).status_code == 422


def test_player_stats_hide_password(client):
    response = client.get("/players/anna")
    assert response.status_code == 200
    payload = response.json()
    assert "password" not in payload
    assert payload == {
        "username": "anna",
        "games_played": 0,
        "accuracy": 100.0,
        "high_score": 15,
        "has_saved_game": True,
    }


def test_unknown_player_is_404(client):
    assert client.get("/players/nobody").status_code == 404

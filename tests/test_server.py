import pytest
from fastapi.testclient import TestClient

from rails.api.server import app, sessions


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    for session in list(sessions.values()):
        session.stop()
    sessions.clear()


def create(client, players=("Alice", "Bob"), seed=3):
    response = client.post("/games", json={"players": list(players), "seed": seed})
    assert response.status_code == 200
    return response.json()


def test_new_game_waits_for_first_decision(client):
    body = create(client)
    state = body["state"]
    assert body["version"] >= 1
    assert state["currentPlayer"] == "Alice"
    assert state["prompt"]["player"] == "Alice"
    assert state["prompt"]["canPass"] is True
    assert len(state["prompt"]["buttons"]) == 4
    assert [p["name"] for p in state["players"]] == ["Alice", "Bob"]


def test_input_moves_the_game_on(client):
    body = create(client)
    session = sessions[body["id"]]

    response = client.post(f"/games/{body['id']}/input", json={"value": ""})
    assert response.status_code == 202
    version, state = session.wait_for_update(body["version"])
    assert version > body["version"]
    assert state["prompt"]["player"] == "Bob"

    response = client.get(f"/games/{body['id']}")
    assert response.json()["state"]["prompt"]["player"] == "Bob"


def test_unknown_game(client):
    assert client.get("/games/nope").status_code == 404
    assert client.post("/games/nope/input", json={"value": ""}).status_code == 404


def test_bad_player_count(client):
    response = client.post("/games", json={"players": ["Alice"]})
    assert response.status_code == 422


def test_websocket_flow(client):
    body = create(client)
    with client.websocket_connect(f"/ws/game/{body['id']}") as websocket:
        message = websocket.receive_json()
        assert message["type"] == "state"
        assert message["data"]["prompt"]["player"] == "Alice"

        websocket.send_json({"type": "input", "value": ""})
        message = websocket.receive_json()
        assert message["type"] == "state"
        assert message["data"]["prompt"]["player"] == "Bob"


def test_websocket_unknown_game(client):
    with client.websocket_connect("/ws/game/nope") as websocket:
        message = websocket.receive_json()
        assert message["type"] == "error"


def test_delete_stops_the_game_thread(client):
    body = create(client)
    session = sessions[body["id"]]

    response = client.delete(f"/games/{body['id']}")
    assert response.status_code == 202
    session.thread.join(timeout=5)
    assert not session.thread.is_alive()
    assert session.state["aborted"] is True
    assert body["id"] not in sessions
    assert client.get(f"/games/{body['id']}").status_code == 404
    assert client.delete(f"/games/{body['id']}").status_code == 404


def test_finished_game_is_dropped(client):
    body = create(client)
    session = sessions[body["id"]]
    session.game.max_turns = 1
    for value in ("", "", "GRAY", "GRAY"):
        version = session.version
        assert client.post(f"/games/{body['id']}/input", json={"value": value}).status_code == 202
        session.wait_for_update(version)
        if session.game.game_over:
            break
    session.thread.join(timeout=5)
    assert session.game.game_over
    assert session.state["gameOver"] is True
    assert body["id"] not in sessions

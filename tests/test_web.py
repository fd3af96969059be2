import pytest
from fastapi.testclient import TestClient

from web.app import app

START = ".b.b.b.b/b.b.b.b./.b.b.b.b/......../......../r.r.r.r./.r.r.r.r/r.r.r.r."
DOUBLE_JUMP = "......../......../...b..../......../...b..../....r.../......../........"
HANGING = "......../......../......../..b...../......../....r.../......../........"
TWO_JUMPERS = "......../......../...b..../......../...b..../....r.b./.......r/........"


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_move_avoids_hanging_piece(client):
    resp = client.post("/api/move", json={"board": HANGING, "player": "Red", "difficulty": "HARD"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["move"] == "e3-f4"
    assert body["depth"] == 5
    assert body["nodes"] > 0
    assert body["status"] == "playing"


def test_move_plays_whole_chain(client):
    resp = client.post("/api/move", json={"board": DOUBLE_JUMP, "player": "red", "difficulty": "easy"})
    body = resp.json()
    assert body["move"] == "e3xc5xe7"
    assert body["status"] == "red-wins"
    assert "b" not in body["board"]


def test_move_rejects_bad_input(client):
    assert client.post("/api/move", json={"board": "nope"}).status_code == 400
    finished = "......../......../......../......../......../....r.../......../........"
    resp = client.post("/api/move", json={"board": finished, "player": "black"})
    assert resp.status_code == 400
    assert "over" in resp.json()["detail"]
    resp = client.post("/api/move", json={"board": START, "difficulty": "impossible"})
    assert resp.status_code == 422


def test_legal_moves(client):
    resp = client.post("/api/legal-moves", json={"board": START, "player": "red", "square": "c3"})
    assert resp.json() == {"moves": ["c3-b4", "c3-d4"], "must_capture": False}

    resp = client.post("/api/legal-moves", json={"board": DOUBLE_JUMP, "player": "red"})
    assert resp.json() == {"moves": ["e3xc5"], "must_capture": True}

    assert client.post(
        "/api/legal-moves", json={"board": START, "square": "z9"}
    ).status_code == 400


def test_play(client):
    resp = client.post("/api/play", json={"board": START, "player": "red", "move": "c3-d4"})
    body = resp.json()
    assert body["turn_complete"] is True
    assert body["player"] == "black"
    assert body["board"].split("/")[4] == "...r...."


def test_play_partial_chain(client):
    resp = client.post("/api/play", json={"board": DOUBLE_JUMP, "player": "red", "move": "e3xc5"})
    body = resp.json()
    assert body["turn_complete"] is False
    assert body["player"] == "red"
    assert body["status"] == "playing"


def test_play_illegal(client):
    resp = client.post("/api/play", json={"board": START, "player": "red", "move": "c3-c4"})
    assert resp.status_code == 400


def test_play_continuation_is_locked_to_the_jumping_piece(client):
    resp = client.post("/api/play", json={"board": TWO_JUMPERS, "player": "red", "move": "e3xc5"})
    body = resp.json()
    assert body["turn_complete"] is False
    assert body["pending"] == "c5"

    resp = client.post(
        "/api/play",
        json={"board": body["board"], "player": "red", "pending": "c5", "move": "h2xf4"},
    )
    assert resp.status_code == 400

    resp = client.post(
        "/api/legal-moves", json={"board": body["board"], "player": "red", "pending": "c5"}
    )
    assert resp.json() == {"moves": ["c5xe7"], "must_capture": True}

    resp = client.post(
        "/api/play",
        json={"board": body["board"], "player": "red", "pending": "c5", "move": "c5xe7"},
    )
    assert resp.status_code == 200
    done = resp.json()
    assert done["turn_complete"] is True
    assert done["pending"] is None
    assert done["player"] == "black"


def test_move_finishes_pending_chain(client):
    board = client.post(
        "/api/play", json={"board": TWO_JUMPERS, "player": "red", "move": "e3xc5"}
    ).json()["board"]
    resp = client.post(
        "/api/move", json={"board": board, "player": "red", "pending": "c5", "difficulty": "hard"}
    )
    assert resp.status_code == 200
    assert resp.json()["move"] == "c5xe7"


def test_bad_pending_square(client):
    for pending in ("z9", "d6", "c3"):
        resp = client.post(
            "/api/play",
            json={"board": START, "player": "red", "pending": pending, "move": "c3-d4"},
        )
        assert resp.status_code == 400


def test_play_rejects_wrong_separator(client):
    resp = client.post("/api/play", json={"board": START, "player": "red", "move": "c3xd4"})
    assert resp.status_code == 400
    resp = client.post("/api/play", json={"board": DOUBLE_JUMP, "player": "red", "move": "e3-c5"})
    assert resp.status_code == 400

import pytest
from fastapi.testclient import TestClient

import boggle.notifier as notifier_mod
import boggle.server as server_mod
from boggle.board import Grid
from boggle.server import create_app
from boggle.settings import settings

BOARD = [
    ["C", "A", "T", "S"],
    ["R", "E", "P", "O"],
    ["B", "O", "N", "E"],
    ["D", "I", "G", "S"],
]


@pytest.fixture
def client(tmp_path, monkeypatch):
    words = tmp_path / "words.txt"
    words.write_text("cat\ncats\nbone\nbones\ndig\ndigs\nfish\n")
    monkeypatch.setattr(settings, "DICTIONARY_URL", "")
    monkeypatch.setattr(settings, "DICTIONARY_PATH", words)
    monkeypatch.setattr(settings, "NTFY_TOPIC", "")
    monkeypatch.setattr(settings, "GRID_SIZE", 4)
    monkeypatch.setattr(settings, "ROUND_SECONDS", 60)
    monkeypatch.setattr(settings, "MIN_WORD_LENGTH", 3)
    monkeypatch.setattr(settings, "MAX_MISSED", 0)
    monkeypatch.setattr(settings, "DEBUG", False)
    monkeypatch.setattr(server_mod, "generate_grid", lambda dice, size: Grid.from_letters(BOARD))

    with TestClient(create_app()) as c:
        yield c


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["dictionary_loaded"] is True
    assert body["dictionary_source"] == "file"
    assert body["word_count"] == 7


def test_no_round_yet(client):
    assert client.get("/round").status_code == 404
    assert client.post("/round/words", json={"word": "cat"}).status_code == 404


def test_start_round(client):
    resp = client.post("/round")
    assert resp.status_code == 200
    body = resp.json()
    assert body["size"] == 4
    assert body["board"][0][0] == {"display": "C", "token": "C", "score": 3}
    assert body["active"] is True
    assert body["total_score"] == 0
    assert body["time_remaining"] <= 60
    assert "generate" in body["stage_timings"]


def test_submit_word(client):
    client.post("/round")
    resp = client.post("/round/words", json={"word": "cat"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["word"] == "CAT"
    assert body["score"] == 5
    assert body["path"] == [[0, 0], [0, 1], [0, 2]]
    assert body["total_score"] == 5

    state = client.get("/round").json()
    assert state["accepted"] == {"CAT": 5}


def test_rejected_words(client):
    client.post("/round")
    client.post("/round/words", json={"word": "cat"})

    resp = client.post("/round/words", json={"word": "CAT"})
    assert resp.status_code == 422
    assert resp.json()["detail"]["reason"] == "duplicate"

    resp = client.post("/round/words", json={"word": "fish"})
    assert resp.json()["detail"] == {
        "reason": "not_on_board",
        "message": "Cannot be formed on this grid.",
        "word": "FISH",
    }

    resp = client.post("/round/words", json={"word": "c@t"})
    assert resp.json()["detail"]["reason"] == "invalid_chars"


def test_challenge_flow(client):
    client.post("/round")
    client.post("/round/words", json={"word": "bones"})

    assert client.get("/round/challenge").status_code == 409

    resp = client.post("/round/end")
    assert resp.status_code == 200
    assert resp.json() == {"total_score": 7, "word_count": 1, "words": {"BONES": 7}}

    resp = client.post("/round/words", json={"word": "cat"})
    assert resp.json()["detail"]["reason"] == "round_over"

    body = client.get("/round/challenge").json()
    assert body["found_count"] == 1
    # CAT CATS BONE BONES DIG DIGS
    assert body["total_possible"] == 6
    assert body["max_score"] == 5 + 6 + 6 + 7 + 5 + 6
    assert body["missed"][0] == {"word": "BONE", "score": 6}
    assert {m["word"] for m in body["missed"]} == {"CAT", "CATS", "BONE", "DIG", "DIGS"}
    assert "enumerate" in body["stage_timings"]


def test_new_round_discards_previous(client):
    client.post("/round")
    client.post("/round/words", json={"word": "cat"})
    client.post("/round")
    state = client.get("/round").json()
    assert state["accepted"] == {}
    assert state["total_score"] == 0


def test_end_round_sends_notification(client, monkeypatch):
    sent = []

    async def fake_send(summary, topic, ntfy_url="https://ntfy.sh"):
        sent.append((summary, topic))

    monkeypatch.setattr(notifier_mod, "send_round_summary", fake_send)
    monkeypatch.setattr(settings, "NTFY_TOPIC", "boggle-test")

    client.post("/round")
    client.post("/round/words", json={"word": "dig"})
    client.post("/round/end")
    client.post("/round/end")

    assert len(sent) == 1
    summary, topic = sent[0]
    assert topic == "boggle-test"
    assert summary["total_score"] == 5
    assert summary["words"] == ["DIG"]
    assert summary["total_possible"] == 6


def test_settings_api(client, monkeypatch):
    body = client.get("/api/settings").json()
    assert body["field_types"]["ROUND_SECONDS"] == "int"
    assert body["settings"]["GRID_SIZE"] == 4

    resp = client.post("/api/settings", json={"ROUND_SECONDS": 30, "MAX_MISSED": 2})
    assert resp.status_code == 200
    assert resp.json()["updated"]["ROUND_SECONDS"] == 30

    client.post("/round")
    client.post("/round/end")
    assert len(client.get("/round/challenge").json()["missed"]) == 2

    resp = client.post("/api/settings", json={"GRID_SIZE": 9, "PORT": 1})
    assert resp.status_code == 400
    assert set(resp.json()["errors"]) == {"GRID_SIZE", "PORT"}


def test_late_submission_still_sends_notification(client, monkeypatch):
    import boggle.session as session_mod

    class FakeTime:
        now = 500.0

        @classmethod
        def monotonic(cls):
            return cls.now

    sent = []

    async def fake_send(summary, topic, ntfy_url="https://ntfy.sh"):
        sent.append(summary)

    monkeypatch.setattr(session_mod, "time", FakeTime)
    monkeypatch.setattr(notifier_mod, "send_round_summary", fake_send)
    monkeypatch.setattr(settings, "NTFY_TOPIC", "boggle-test")
    monkeypatch.setattr(settings, "ROUND_SECONDS", 10)

    client.post("/round")
    client.post("/round/words", json={"word": "cat"})
    FakeTime.now += 11
    resp = client.post("/round/words", json={"word": "cats"})
    assert resp.json()["detail"]["reason"] == "round_over"

    resp = client.post("/round/end")
    assert resp.json()["total_score"] == 5
    assert len(sent) == 1
    assert sent[0]["words"] == ["CAT"]


def test_dictionary_loads_off_the_event_loop(tmp_path, monkeypatch):
    import asyncio

    import boggle.dictionary as dictionary_mod

    real_load = dictionary_mod.load_dictionary
    loops = []

    def recording_load(cfg):
        try:
            loops.append(asyncio.get_running_loop())
        except RuntimeError:
            loops.append(None)
        return real_load(cfg)

    monkeypatch.setattr(dictionary_mod, "load_dictionary", recording_load)
    monkeypatch.setattr(settings, "DICTIONARY_URL", "")
    monkeypatch.setattr(settings, "DICTIONARY_PATH", tmp_path / "missing.txt")
    monkeypatch.setattr(settings, "GRID_SIZE", 4)

    with TestClient(create_app()) as c:
        assert c.get("/health").json()["dictionary_source"] == "demo"

    assert loops == [None]

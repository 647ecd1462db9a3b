import logging

import pytest
from fastapi.testclient import TestClient

from boggle import server
from boggle.settings import log_level, settings

BOARD = "abcd\nefgh\nijkl\nmnop"


@pytest.fixture
def client(tmp_path, monkeypatch):
    dict_path = tmp_path / "dictionary.txt"
    dict_path.write_text("abcd\nafkp\nmnop\nlies\nabab\nabcdhgfe\n")
    monkeypatch.setattr(settings, "DICTIONARY_PATH", dict_path)
    monkeypatch.setattr(settings, "MAX_RESULTS", 50)
    monkeypatch.setattr(settings, "STRATEGY", "trie")
    with TestClient(server.create_app()) as c:
        yield c


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "dictionary_loaded": True, "dictionary_size": 6}


@pytest.mark.parametrize("strategy", ["trie", "filter"])
def test_solve_with_loaded_dictionary(client, strategy):
    resp = client.post("/solve", json={"board": BOARD, "strategy": strategy})
    assert resp.status_code == 200
    data = resp.json()
    assert data["size"] == 4
    assert data["board"] == ["abcd", "efgh", "ijkl", "mnop"]
    assert data["words"] == ["abcdhgfe", "abcd", "afkp", "mnop"]
    assert data["word_count"] == 4
    assert data["strategy"] == strategy
    assert "total" in data["stage_timings"]


def test_solve_with_supplied_words_and_paths(client):
    resp = client.post("/solve", json={"board": BOARD, "words": ["ponm", "bfea"], "paths": True})
    assert resp.status_code == 200
    data = resp.json()
    assert data["words"] == ["bfea", "ponm"]
    assert data["paths"]["ponm"] == [[3, 3], [3, 2], [3, 1], [3, 0]]


def test_solve_max_results(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_RESULTS", 1)
    data = client.post("/solve", json={"board": BOARD}).json()
    assert data["words"] == ["abcdhgfe"]
    assert data["word_count"] == 4


def test_solve_bad_board(client):
    resp = client.post("/solve", json={"board": "ab\ncd"})
    assert resp.status_code == 400
    assert "3 x 3" in resp.json()["detail"]
    resp = client.post("/solve", json={"board": "ab1\ncde\nfgh"})
    assert resp.status_code == 400


def test_solve_board_too_large(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_BOARD_SIZE", 3)
    resp = client.post("/solve", json={"board": BOARD})
    assert resp.status_code == 413


def test_solve_unknown_strategy(client):
    resp = client.post("/solve", json={"board": BOARD, "strategy": "guess"})
    assert resp.status_code == 400


def test_solve_without_dictionary(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DICTIONARY_PATH", tmp_path / "missing.txt")
    monkeypatch.setattr(server, "_dictionary", None)
    with TestClient(server.create_app()) as c:
        assert c.get("/health").json()["dictionary_loaded"] is False
        assert c.post("/solve", json={"board": BOARD}).status_code == 503
        assert c.post("/solve", json={"board": BOARD, "words": ["abcd"]}).json()["words"] == ["abcd"]


def test_settings_api(client, monkeypatch):
    monkeypatch.setattr(settings, "MIN_WORD_LENGTH", settings.MIN_WORD_LENGTH)
    resp = client.get("/api/settings")
    assert resp.status_code == 200
    assert resp.json()["field_types"]["STRATEGY"] == "str"

    resp = client.post("/api/settings", json={"MIN_WORD_LENGTH": 8})
    assert resp.status_code == 200
    assert resp.json()["updated"]["MIN_WORD_LENGTH"] == 8
    data = client.post("/solve", json={"board": BOARD}).json()
    assert data["words"] == ["abcdhgfe"]

    resp = client.post("/api/settings", json={"STRATEGY": "guess"})
    assert resp.status_code == 400
    assert "STRATEGY" in resp.json()["errors"]


def test_debug_setting_changes_log_level(client, monkeypatch):
    monkeypatch.setattr(settings, "DEBUG", False)
    boggle_logger = logging.getLogger("boggle")
    previous = boggle_logger.level
    try:
        resp = client.post("/api/settings", json={"DEBUG": True})
        assert resp.status_code == 200
        assert boggle_logger.level == logging.DEBUG

        resp = client.post("/api/settings", json={"DEBUG": False})
        assert resp.status_code == 200
        assert boggle_logger.level == log_level(settings)
    finally:
        boggle_logger.setLevel(previous)

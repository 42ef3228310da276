from __future__ import annotations

import importlib
import logging

import pytest

import prefixindex.app
from prefixindex import LINEAR_SCAN_LIMIT


@pytest.fixture
def service(monkeypatch):
    monkeypatch.delenv("PREFIXINDEX_WORDS", raising=False)
    monkeypatch.delenv("PREFIXINDEX_LINEAR_SCAN_LIMIT", raising=False)
    return importlib.reload(prefixindex.app)


@pytest.fixture
def client(service):
    return service.app.test_client()


def test_health(client, service) -> None:
    body = client.get("/health").get_json()
    assert body["status"] == "healthy"
    assert body["index_size"] == len(service._SEED_WORDS)


def test_stats(client) -> None:
    body = client.get("/stats").get_json()
    assert body["seed_source"] == "built-in"


def test_find_unique_prefix(client) -> None:
    resp = client.get("/find?q=stat")
    assert resp.status_code == 200
    assert resp.get_json() == {"prefix": "stat", "key": "status", "value": "status"}


def test_find_ambiguous_lists_candidates(client) -> None:
    resp = client.get("/find?q=re&limit=2")
    assert resp.status_code == 409
    body = resp.get_json()
    assert body["candidates"] == ["rebase", "reflog"]
    assert "ambiguous" in body["error"]


def test_find_not_found(client) -> None:
    resp = client.get("/find?q=zz")
    assert resp.status_code == 404
    assert "not found" in resp.get_json()["error"]


def test_find_requires_query(client) -> None:
    assert client.get("/find").status_code == 400
    assert client.get("/find?q=").status_code == 409


def test_matches(client) -> None:
    body = client.get("/matches?q=re&limit=3").get_json()
    assert body["count"] == 3
    assert [m["key"] for m in body["matches"]] == ["rebase", "reflog", "remote"]

    body = client.get("/matches?q=status").get_json()
    assert body["matches"] == [{"key": "status", "value": "status"}]

    body = client.get("/matches?q=nothing").get_json()
    assert body == {"prefix": "nothing", "count": 0, "matches": []}


def test_insert_then_find(client) -> None:
    resp = client.post("/insert", json={"key": "stage", "value": 7})
    assert resp.status_code == 201
    assert resp.get_json()["value"] == 7

    assert client.get("/find?q=stag").get_json()["value"] == 7
    assert client.get("/find?q=sta").status_code == 409


@pytest.mark.parametrize("body", [{}, {"key": 5}, {"key": None}, {"key": "x" * 257}])
def test_insert_rejects_bad_keys(client, body) -> None:
    assert client.post("/insert", json=body).status_code == 400


def test_insert_empty_key(client) -> None:
    resp = client.post("/insert", json={"key": "", "value": 1})
    assert resp.status_code == 201
    assert resp.get_json()["inserted"] == ""

    resp = client.get("/find?q=")
    assert resp.status_code == 200
    assert resp.get_json() == {"prefix": "", "key": "", "value": 1}


def test_bad_linear_scan_limit_falls_back(monkeypatch, caplog) -> None:
    monkeypatch.delenv("PREFIXINDEX_WORDS", raising=False)
    monkeypatch.setenv("PREFIXINDEX_LINEAR_SCAN_LIMIT", "lots")
    with caplog.at_level(logging.WARNING, logger="prefixindex-service"):
        service = importlib.reload(prefixindex.app)

    assert service.index.linear_scan_limit == LINEAR_SCAN_LIMIT
    assert "PREFIXINDEX_LINEAR_SCAN_LIMIT='lots'" in caplog.text
    assert service.app.test_client().get("/find?q=stat").get_json()["key"] == "status"


def test_seed_from_word_list(monkeypatch, tmp_path) -> None:
    path = tmp_path / "words.txt"
    path.write_text("alpha\nalphabet\nbeta\n", encoding="utf-8")
    monkeypatch.setenv("PREFIXINDEX_WORDS", str(path))
    monkeypatch.setenv("PREFIXINDEX_LINEAR_SCAN_LIMIT", "0")
    service = importlib.reload(prefixindex.app)
    client = service.app.test_client()

    stats = client.get("/stats").get_json()
    assert stats["total_keys"] == 3
    assert stats["seed_source"] == str(path)
    assert service.index.linear_scan_limit == 0
    assert client.get("/find?q=alpha").get_json()["key"] == "alpha"
    assert client.get("/find?q=alphab").get_json()["key"] == "alphabet"
    assert client.get("/find?q=b").get_json()["key"] == "beta"

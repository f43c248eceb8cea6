"""
API Server Tests

Smoke tests for the FastAPI endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from deployment import fastapi_app
from deployment.fastapi_app import app, set_analyzer
from monitoring.latency_metrics import get_latency_collector


@pytest.fixture
def client():
    """Create test client with no graph loaded."""
    set_analyzer(None)
    get_latency_collector().reset()
    with TestClient(app) as test_client:
        yield test_client
    set_analyzer(None)


@pytest.fixture
def corpus_dir(tmp_path, monkeypatch):
    """Confine file loading to a fresh directory."""
    root = tmp_path / "corpora"
    root.mkdir()
    monkeypatch.setattr(fastapi_app.settings, "CORPUS_DIR", str(root))
    return root


@pytest.fixture
def loaded_client(client, sample_text):
    response = client.post("/graph", json={"text": sample_text, "seed": 5})
    assert response.status_code == 200
    return client


# ==============================================================================
# Health and Graph Loading
# ==============================================================================


def test_health_without_graph(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "degraded"
    assert data["graph_loaded"] is False
    assert "X-Request-ID" in response.headers


def test_queries_require_a_graph(client):
    response = client.get("/bridge-words", params={"word1": "a", "word2": "b"})

    assert response.status_code == 409
    assert response.json()["error"] == "Graph not loaded"


def test_build_graph(client, sample_text):
    response = client.post("/graph", json={"text": sample_text})

    assert response.status_code == 200
    data = response.json()
    assert data["total_nodes"] == 10
    assert data["total_edges"] == 12
    assert data["sink_nodes"] == 1

    health = client.get("/health").json()
    assert health["graph_loaded"] is True
    assert health["node_count"] == 10


def test_build_graph_from_file(corpus_dir, client, sample_text):
    (corpus_dir / "corpus.txt").write_text(sample_text, encoding="utf-8")

    response = client.post("/graph/file", json={"path": "corpus.txt", "seed": 2})

    assert response.status_code == 200
    assert response.json()["seed"] == 2
    assert client.get("/graph").json()["doc_id"] == response.json()["doc_id"]


def test_build_graph_from_missing_file(corpus_dir, client):
    response = client.post("/graph/file", json={"path": "nope.txt"})

    assert response.status_code == 404


@pytest.mark.parametrize("escape", ["../outside/secret.txt", "absolute"])
def test_build_graph_refuses_paths_outside_corpus_dir(corpus_dir, client, escape):
    outside = corpus_dir.parent / "outside"
    outside.mkdir()
    secret = outside / "secret.txt"
    secret.write_text("db password hunter two", encoding="utf-8")
    path = str(secret) if escape == "absolute" else escape

    response = client.post("/graph/file", json={"path": path})

    assert response.status_code == 403
    assert client.get("/health").json()["graph_loaded"] is False


def test_build_graph_from_oversized_file(corpus_dir, client, monkeypatch):
    monkeypatch.setattr(fastapi_app.settings, "MAX_CORPUS_BYTES", 8)
    (corpus_dir / "big.txt").write_text("far too many words here", encoding="utf-8")

    response = client.post("/graph/file", json={"path": "big.txt"})

    assert response.status_code == 413
    assert client.get("/health").json()["graph_loaded"] is False


def test_build_graph_from_oversized_text(client, monkeypatch):
    monkeypatch.setattr(fastapi_app.settings, "MAX_CORPUS_BYTES", 8)

    response = client.post("/graph", json={"text": "far too many words here"})

    assert response.status_code == 413
    assert client.get("/health").json()["graph_loaded"] is False


def test_edges(loaded_client):
    data = loaded_client.get("/graph/edges").json()

    assert data["total"] == 12
    assert data["edges"][0] == {"source": "to", "target": "explore", "weight": 1}


def test_graph_text_arrow(loaded_client):
    data = loaded_client.get("/graph/text").json()
    lines = data["text"].split("\n")

    assert data["style"] == "arrow"
    assert lines[0] == "Directed graph edges (u -> v [w]):"
    assert lines[1] == "to -> explore [w=1]"
    assert len(lines) == 13


def test_graph_text_structured(loaded_client):
    data = loaded_client.get("/graph/text", params={"style": "structured"}).json()
    lines = data["text"].split("\n")

    assert data["style"] == "structured"
    assert lines[:3] == ["[to]", "  - explore (w=1)", "  - seek (w=1)"]
    assert "[civilizations]" not in lines


def test_graph_text_unknown_style(loaded_client):
    response = loaded_client.get("/graph/text", params={"style": "dot"})

    assert response.status_code == 422


# ==============================================================================
# Queries
# ==============================================================================


def test_bridge_words(loaded_client):
    data = loaded_client.get(
        "/bridge-words", params={"word1": "seek", "word2": "new"}
    ).json()

    assert data["status"] == "found"
    assert data["bridges"] == ["out"]
    assert data["message"] == "The bridge words from seek to new are: out."


def test_bridge_words_missing(loaded_client):
    data = loaded_client.get(
        "/bridge-words", params={"word1": "seek", "word2": "zzz"}
    ).json()

    assert data["status"] == "no_such_word"
    assert data["message"] == "No word1 or word2 in the graph!"


def test_augment(loaded_client):
    response = loaded_client.post("/augment", json={"text": "Seek to explore new life"})

    assert response.json()["text"] == "seek to explore strange new life"


def test_shortest_path(loaded_client):
    data = loaded_client.get(
        "/shortest-path", params={"source": "worlds", "target": "seek"}
    ).json()

    assert data["status"] == "found"
    assert data["path"] == ["worlds", "to", "seek"]
    assert data["cost"] == 2

    data = loaded_client.get(
        "/shortest-path", params={"source": "civilizations", "target": "to"}
    ).json()
    assert data["status"] == "no_path"
    assert data["cost"] is None


def test_pagerank(loaded_client):
    score = loaded_client.get("/pagerank/New").json()
    missing = loaded_client.get("/pagerank/zzz").json()
    top = loaded_client.get("/pagerank", params={"top": 3}).json()

    assert score["word"] == "new"
    assert score["score"] > 0.0
    assert score["message"] == f"PageRank(new)={score['score']:.6f}"
    assert missing["message"] == "PageRank(zzz)=0.000000"
    assert missing["score"] == 0.0
    assert top["results"][0]["word"] == "new"
    assert len(top["results"]) == 3
    assert top["total_mass"] < 1.0


def test_random_walk(loaded_client):
    data = loaded_client.post("/random-walk").json()

    assert data["status"] == "ok"
    assert data["text"] == " -> ".join(data["nodes"])


def test_random_walk_on_empty_graph(client):
    client.post("/graph", json={"text": "!!!"})
    data = client.post("/random-walk").json()

    assert data["status"] == "empty_graph"
    assert data["text"] == "Graph empty."


def test_metrics(loaded_client):
    loaded_client.get("/bridge-words", params={"word1": "a", "word2": "b"})
    summary = loaded_client.get("/metrics").json()

    assert summary["counts"]["build"] == 1
    assert summary["counts"]["bridge"] == 1

    loaded_client.post("/metrics/reset")
    assert loaded_client.get("/metrics").json()["counts"]["bridge"] == 0

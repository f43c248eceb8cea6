"""
Tests for PageRank scoring.
"""

import pytest

from ranking.pagerank import DAMPING_FACTOR, ITERATIONS, PageRankEngine
from word_graph.graph_builder import build_graph, build_graph_from_text


def reference_page_rank(graph, damping=DAMPING_FACTOR, iterations=ITERATIONS):
    """Straightforward dict-based rendition of the scoring formula."""
    n = graph.node_count
    rank = {u: 1.0 / n for u in graph.nodes}
    for _ in range(iterations):
        nxt = {u: (1 - damping) / n for u in graph.nodes}
        for u in graph.nodes:
            total = graph.out_weight(u)
            if total == 0:
                continue
            for v, w in graph.successors(u).items():
                nxt[v] += damping * rank[u] * w / total
        rank = nxt
    return rank


def test_cycle_without_sinks_keeps_unit_mass():
    graph = build_graph(["a", "b", "c", "a"])
    engine = PageRankEngine(graph)

    assert engine.total_mass() == pytest.approx(1.0, abs=1e-9)
    for word in ("a", "b", "c"):
        assert engine.page_rank(word) == pytest.approx(1 / 3)


def test_sink_leaks_mass(sample_graph):
    engine = PageRankEngine(sample_graph)

    assert sample_graph.sinks() == ["civilizations"]
    assert engine.total_mass() < 1.0


def test_two_node_chain_values():
    engine = PageRankEngine(build_graph(["a", "b"]))

    assert engine.page_rank("a") == pytest.approx(0.075)
    assert engine.page_rank("b") == pytest.approx(0.075 + 0.85 * 0.075)
    assert engine.total_mass() == pytest.approx(0.21375)


@pytest.mark.parametrize(
    "text",
    [
        "To explore strange new worlds, to seek out new life and new civilizations",
        "the cat sat on the mat and the cat ran to the mat on the hat",
        "a a b a c c a b",
    ],
)
def test_matches_reference_formula(text):
    graph = build_graph_from_text(text)
    expected = reference_page_rank(graph)
    scores = PageRankEngine(graph).scores()

    assert scores.keys() == expected.keys()
    for word, score in expected.items():
        assert scores[word] == pytest.approx(score, rel=1e-9)


def test_weights_shape_the_flow():
    # a sends 3/4 of its rank to c and 1/4 to b
    graph = build_graph(["a", "c", "a", "c", "a", "c", "a", "b"])
    engine = PageRankEngine(graph)

    assert engine.page_rank("c") > engine.page_rank("b")


def test_unknown_word_scores_zero(sample_graph):
    assert PageRankEngine(sample_graph).page_rank("missing") == 0.0


def test_lookup_is_case_insensitive(sample_graph):
    engine = PageRankEngine(sample_graph)

    assert engine.page_rank("NEW") == engine.page_rank("new") > 0.0


def test_new_ranks_highest(sample_graph):
    top = PageRankEngine(sample_graph).top(3)

    assert len(top) == 3
    assert top[0][0] == "new"
    assert [s for _, s in top] == sorted((s for _, s in top), reverse=True)


def test_empty_graph():
    engine = PageRankEngine(build_graph([]))

    assert engine.page_rank("anything") == 0.0
    assert engine.scores() == {}
    assert engine.top(5) == []
    assert engine.total_mass() == 0.0


def test_custom_parameters_and_validation():
    graph = build_graph(["a", "b"])
    engine = PageRankEngine(graph, damping=0.5, iterations=1)

    assert engine.page_rank("b") == pytest.approx(0.25 + 0.5 * 0.5)

    with pytest.raises(ValueError):
        PageRankEngine(graph, damping=0.0)
    with pytest.raises(ValueError):
        PageRankEngine(graph, iterations=0)

"""
Shared test fixtures.
"""

import random

import pytest

from word_graph.graph_builder import WordGraph, build_graph, build_graph_from_text

SAMPLE_CORPUS = (
    "To explore strange new worlds,\n"
    "To seek out new life and new civilizations?"
)


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_CORPUS


@pytest.fixture
def sample_graph() -> WordGraph:
    """
    Edges (all weight 1):
    to->explore, explore->strange, strange->new, new->worlds, worlds->to,
    to->seek, seek->out, out->new, new->life, life->and, and->new,
    new->civilizations. `civilizations` is a sink.
    """
    return build_graph_from_text(SAMPLE_CORPUS)


@pytest.fixture
def chain_graph() -> WordGraph:
    """a -> b -> c"""
    return build_graph(["a", "b", "c"])


@pytest.fixture
def weighted_graph() -> WordGraph:
    """a->c (3), c->a (3), a->b (1), b->c (1)"""
    return build_graph(["a", "c", "a", "c", "a", "c", "a", "b", "c"])


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)

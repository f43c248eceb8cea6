"""
Ranking Module.

Scores word importance in the word graph with fixed-iteration weighted
PageRank (damping 0.85, 20 rounds, no redistribution of sink mass).

Usage:
    from ranking import PageRankEngine

    engine = PageRankEngine(graph)
    score = engine.page_rank("new")
"""

from .pagerank import DAMPING_FACTOR, ITERATIONS, PageRankEngine

__all__ = [
    "PageRankEngine",
    "DAMPING_FACTOR",
    "ITERATIONS",
]

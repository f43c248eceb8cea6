"""
Word Graph Module.

Turns a token stream into a weighted directed word-adjacency graph and
answers queries over it.

Pattern:
1. Normalized tokens populate the graph (edge weight = adjacency count)
2. Bridge lookup finds words linking two others in one hop each
3. Traversals find weighted shortest paths and random edge-disjoint walks

Usage:
    from word_graph import BridgeWordFinder, build_graph_from_text

    graph = build_graph_from_text(corpus_text)
    result = BridgeWordFinder(graph).find("seek", "new")
    print(result.message)
"""

from .bridge_words import BridgeResult, BridgeStatus, BridgeWordFinder, TextAugmenter
from .graph_builder import (
    Edge,
    GraphBuilder,
    WordGraph,
    build_graph,
    build_graph_from_text,
)
from .graph_summarizer import edge_list_to_text, format_page_rank
from .graph_traversal import (
    PathResult,
    PathStatus,
    RandomWalker,
    ShortestPathSolver,
    WalkResult,
    WalkStatus,
)

__all__ = [
    "WordGraph",
    "Edge",
    "GraphBuilder",
    "build_graph",
    "build_graph_from_text",
    "BridgeWordFinder",
    "BridgeResult",
    "BridgeStatus",
    "TextAugmenter",
    "ShortestPathSolver",
    "PathResult",
    "PathStatus",
    "RandomWalker",
    "WalkResult",
    "WalkStatus",
    "edge_list_to_text",
    "format_page_rank",
]

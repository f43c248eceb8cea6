"""
Plain-text rendering of the word graph.

Produces the edge listing that a console or an external renderer
consumes. Image and DOT generation live outside this package.
"""

import logging
from typing import Dict, List

from .graph_builder import Edge, WordGraph

logger = logging.getLogger(__name__)


def edge_list_to_text(graph: WordGraph, format_style: str = "arrow") -> str:
    """
    Render every edge of the graph as text.

    Format styles:
    - arrow: One `u -> v [w=n]` line per edge under a header
    - structured: Edges grouped under their source word

    Example output (arrow):
    Directed graph edges (u -> v [w]):
    to -> be [w=2]
    be -> or [w=1]

    Args:
        graph: Built word graph
        format_style: Output format

    Returns:
        Edge listing
    """
    edges = graph.edges()

    if format_style == "arrow":
        return _format_arrow(edges)
    elif format_style == "structured":
        return _format_structured(edges)
    else:
        raise ValueError(f"Unknown format style: {format_style}")


def _format_arrow(edges: List[Edge]) -> str:
    lines = ["Directed graph edges (u -> v [w]):"]
    lines.extend(f"{e.source} -> {e.target} [w={e.weight}]" for e in edges)
    return "\n".join(lines)


def _format_structured(edges: List[Edge]) -> str:
    """Group by source word."""
    by_source: Dict[str, List[str]] = {}

    for e in edges:
        if e.source not in by_source:
            by_source[e.source] = []
        by_source[e.source].append(f"{e.target} (w={e.weight})")

    sections = []
    for source, targets in by_source.items():
        sections.append(f"[{source}]")
        for target in targets:
            sections.append(f"  - {target}")

    return "\n".join(sections)


def format_page_rank(word: str, score: float) -> str:
    return f"PageRank({word.lower()})={score:.6f}"

"""
Word-adjacency graph construction and read access.

Nodes are normalized words; an edge u -> v carries the number of times
v immediately followed u in the corpus.

The graph is built once by GraphBuilder and never mutated afterwards, so
every query component can share one instance.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ingestion.normalize import normalize_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edge:
    """A weighted directed edge between two words."""

    source: str
    target: str
    weight: int


class WordGraph:
    """
    Immutable directed weighted word graph.

    Words are interned into an arena: `nodes[i]` is the word with index i,
    and `adjacency[i]` holds `(successor_index, weight)` pairs in the order
    each successor was first observed.

    Usage:
        graph = build_graph_from_text("to be or not to be")
        graph.successors("to")   # {"be": 2}
        graph.edges()            # [Edge("to", "be", 2), ...]
    """

    def __init__(
        self,
        nodes: Sequence[str],
        adjacency: Sequence[Sequence[Tuple[int, int]]],
    ):
        if len(nodes) != len(adjacency):
            raise ValueError("Every node needs an adjacency entry")

        self._nodes: Tuple[str, ...] = tuple(nodes)
        self._index: Dict[str, int] = {word: i for i, word in enumerate(self._nodes)}
        self._adjacency: Tuple[Tuple[Tuple[int, int], ...], ...] = tuple(
            tuple(pairs) for pairs in adjacency
        )
        self._out_weights: Tuple[int, ...] = tuple(
            sum(w for _, w in pairs) for pairs in self._adjacency
        )

    @property
    def nodes(self) -> Tuple[str, ...]:
        """Words in first-appearance order."""
        return self._nodes

    @property
    def adjacency(self) -> Tuple[Tuple[Tuple[int, int], ...], ...]:
        """Index-based adjacency lists."""
        return self._adjacency

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(pairs) for pairs in self._adjacency)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def has_node(self, word: str) -> bool:
        return word in self._index

    def index_of(self, word: str) -> Optional[int]:
        """Arena index of a word, or None if absent."""
        return self._index.get(word)

    def word_at(self, index: int) -> str:
        return self._nodes[index]

    def successors(self, word: str) -> Dict[str, int]:
        """
        Outgoing edges of a word.

        Returns:
            Fresh dict of successor -> weight (empty for sinks and unknown words)
        """
        idx = self._index.get(word)
        if idx is None:
            return {}
        return {self._nodes[j]: w for j, w in self._adjacency[idx]}

    def weight(self, source: str, target: str) -> int:
        """Weight of source -> target, 0 if there is no such edge."""
        return self.successors(source).get(target, 0)

    def has_edge(self, source: str, target: str) -> bool:
        return self.weight(source, target) > 0

    def out_weight(self, word: str) -> int:
        """Total outgoing weight of a word."""
        idx = self._index.get(word)
        return self._out_weights[idx] if idx is not None else 0

    def out_weight_at(self, index: int) -> int:
        return self._out_weights[index]

    def edges(self) -> List[Edge]:
        """
        Edge-list view for external renderers.

        Order is stable: sources in node order, targets in first-observation
        order.
        """
        return [
            Edge(source=self._nodes[i], target=self._nodes[j], weight=w)
            for i, pairs in enumerate(self._adjacency)
            for j, w in pairs
        ]

    def sinks(self) -> List[str]:
        """Words with no outgoing edges."""
        return [self._nodes[i] for i, pairs in enumerate(self._adjacency) if not pairs]

    def get_stats(self) -> Dict:
        """Get graph statistics."""
        total_weight = sum(self._out_weights)
        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "total_weight": total_weight,
            "sink_nodes": len(self.sinks()),
            "self_loops": sum(
                1 for i, pairs in enumerate(self._adjacency) for j, _ in pairs if i == j
            ),
        }


class GraphBuilder:
    """
    Accumulates adjacent-token counts and freezes them into a WordGraph.

    Usage:
        builder = GraphBuilder()
        builder.add_tokens(["a", "b", "a", "b"])
        graph = builder.build()
    """

    def __init__(self):
        self._index: Dict[str, int] = {}
        self._nodes: List[str] = []
        self._adjacency: List[Dict[int, int]] = []
        self._built = False

    def _intern(self, word: str) -> int:
        idx = self._index.get(word)
        if idx is None:
            idx = len(self._nodes)
            self._index[word] = idx
            self._nodes.append(word)
            self._adjacency.append({})
        return idx

    def add_edge(self, source: str, target: str) -> None:
        """Record one observation of target following source."""
        if self._built:
            raise RuntimeError("GraphBuilder has already built its graph")
        if not source or not target:
            return

        u = self._intern(source)
        v = self._intern(target)
        successors = self._adjacency[u]
        successors[v] = successors.get(v, 0) + 1

    def add_tokens(self, tokens: Iterable[str]) -> "GraphBuilder":
        """
        Record every consecutive pair in a token sequence.

        A lone token creates no node; words only enter the graph through
        an adjacent pair.
        """
        previous = None
        for token in tokens:
            if previous is not None:
                self.add_edge(previous, token)
            previous = token
        return self

    def build(self) -> WordGraph:
        """Freeze the accumulated counts. The builder cannot be reused."""
        if self._built:
            raise RuntimeError("GraphBuilder has already built its graph")
        self._built = True

        # dicts preserve insertion order, i.e. first observation
        graph = WordGraph(
            nodes=self._nodes,
            adjacency=[list(successors.items()) for successors in self._adjacency],
        )
        logger.info(
            f"Built word graph: {graph.node_count} nodes, {graph.edge_count} edges"
        )
        return graph


def build_graph(tokens: Iterable[str]) -> WordGraph:
    """Build a graph from an already-normalized token sequence."""
    return GraphBuilder().add_tokens(tokens).build()


def build_graph_from_text(text: str) -> WordGraph:
    """Normalize raw text and build its graph."""
    return build_graph(normalize_text(text))

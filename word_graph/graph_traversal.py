"""
Graph traversal algorithms over the word graph.

- Weighted shortest path (Dijkstra) between two words
- Randomized walk that never reuses a directed edge
"""

import heapq
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from .graph_builder import WordGraph

logger = logging.getLogger(__name__)


class PathStatus(Enum):
    NO_SUCH_WORD = "no_such_word"
    NO_PATH = "no_path"
    FOUND = "found"


@dataclass
class PathResult:
    """Result of a shortest-path query."""

    status: PathStatus
    source: str
    target: str
    path: List[str] = field(default_factory=list)
    cost: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.status == PathStatus.FOUND

    @property
    def message(self) -> str:
        if self.status == PathStatus.NO_SUCH_WORD:
            return "No word1 or word2 in the graph!"
        if self.status == PathStatus.NO_PATH:
            return f"No path from {self.source} to {self.target}"
        return f"Path: {' -> '.join(self.path)} (cost={self.cost})"


class ShortestPathSolver:
    """
    Dijkstra over co-occurrence weights.

    Equal-cost candidates are settled in the order they were pushed onto
    the priority queue.

    Usage:
        solver = ShortestPathSolver(graph)
        result = solver.shortest_path("to", "explore")
        print(result.message)
    """

    def __init__(self, graph: WordGraph):
        self.graph = graph

    def _dijkstra(
        self,
        source: int,
        target: Optional[int] = None,
    ) -> Tuple[Dict[int, int], Dict[int, int]]:
        """
        Run Dijkstra from a node index.

        Args:
            source: Start index
            target: Stop once this index is settled (None runs to completion)

        Returns:
            (distances, predecessors) for every reached index
        """
        dist: Dict[int, int] = {source: 0}
        prev: Dict[int, int] = {}
        visited: Set[int] = set()
        counter = 0
        heap: List[Tuple[int, int, int]] = [(0, counter, source)]
        adjacency = self.graph.adjacency

        while heap:
            d, _, u = heapq.heappop(heap)
            if u in visited:
                continue
            visited.add(u)
            if u == target:
                break

            for v, w in adjacency[u]:
                alt = d + w
                if v not in dist or alt < dist[v]:
                    dist[v] = alt
                    prev[v] = u
                    counter += 1
                    heapq.heappush(heap, (alt, counter, v))

        return dist, prev

    def _reconstruct(self, prev: Dict[int, int], source: int, target: int) -> List[str]:
        path = [target]
        while path[-1] != source:
            path.append(prev[path[-1]])
        path.reverse()
        return [self.graph.word_at(i) for i in path]

    def shortest_path(self, source: str, target: str) -> PathResult:
        """
        Find the cheapest directed path between two words.

        Args:
            source: Start word (case-insensitive)
            target: End word (case-insensitive)

        Returns:
            PathResult with status NO_SUCH_WORD, NO_PATH or FOUND
        """
        source = source.lower()
        target = target.lower()
        src = self.graph.index_of(source)
        dst = self.graph.index_of(target)

        if src is None or dst is None:
            return PathResult(PathStatus.NO_SUCH_WORD, source, target)

        dist, prev = self._dijkstra(src, dst)

        if dst != src and dst not in prev:
            return PathResult(PathStatus.NO_PATH, source, target)

        return PathResult(
            PathStatus.FOUND,
            source,
            target,
            path=self._reconstruct(prev, src, dst),
            cost=dist[dst],
        )

    def shortest_paths_from(self, source: str) -> Dict[str, PathResult]:
        """
        Shortest paths from one word to every other word.

        Returns:
            Dict target -> PathResult, empty if the source is unknown
        """
        source = source.lower()
        src = self.graph.index_of(source)
        if src is None:
            return {}

        dist, prev = self._dijkstra(src)
        results: Dict[str, PathResult] = {}

        for dst, target in enumerate(self.graph.nodes):
            if dst == src:
                continue
            if dst not in prev:
                results[target] = PathResult(PathStatus.NO_PATH, source, target)
            else:
                results[target] = PathResult(
                    PathStatus.FOUND,
                    source,
                    target,
                    path=self._reconstruct(prev, src, dst),
                    cost=dist[dst],
                )

        logger.debug(
            f"Single-source search from '{source}' reached "
            f"{sum(r.found for r in results.values())}/{len(results)} words"
        )
        return results


class WalkStatus(Enum):
    EMPTY_GRAPH = "empty_graph"
    OK = "ok"


@dataclass
class WalkResult:
    """Result of a random walk."""

    status: WalkStatus
    nodes: List[str] = field(default_factory=list)

    def to_text(self) -> str:
        if self.status == WalkStatus.EMPTY_GRAPH:
            return "Graph empty."
        return " -> ".join(self.nodes)


class RandomWalker:
    """
    Random traversal that stops at a dead end or on the first repeated edge.

    Every directed edge is traversed at most once, so a walk visits at most
    `edge_count + 1` nodes.

    Usage:
        walker = RandomWalker(graph)
        result = walker.walk(random.Random(7))
        print(result.to_text())
    """

    def __init__(self, graph: WordGraph):
        self.graph = graph

    def walk(self, rng) -> WalkResult:
        """
        Walk the graph from a random start node.

        Args:
            rng: Random source exposing `choice`

        Returns:
            WalkResult; EMPTY_GRAPH when there are no nodes
        """
        if self.graph.node_count == 0:
            return WalkResult(WalkStatus.EMPTY_GRAPH)

        adjacency = self.graph.adjacency
        current = rng.choice(range(self.graph.node_count))
        visited = [current]
        used_edges: Set[Tuple[int, int]] = set()

        while adjacency[current]:
            chosen, _ = rng.choice(adjacency[current])
            edge = (current, chosen)
            if edge in used_edges:
                break
            used_edges.add(edge)
            visited.append(chosen)
            current = chosen

        logger.debug(f"Random walk visited {len(visited)} nodes")
        return WalkResult(WalkStatus.OK, [self.graph.word_at(i) for i in visited])

"""
Word graph analysis session.

One session owns one corpus graph, one seeded random source and one
instance of every query component:
1. Normalize the corpus and build the graph once
2. Answer bridge, augmentation, path, PageRank and walk queries against it
"""

import logging
import random
from typing import Dict, List, Optional, Tuple

from ingestion.corpus_loader import CorpusDocument, compute_content_hash, load_corpus
from ranking.pagerank import PageRankEngine
from word_graph.bridge_words import BridgeResult, BridgeWordFinder, TextAugmenter
from word_graph.graph_builder import Edge, WordGraph, build_graph_from_text
from word_graph.graph_summarizer import edge_list_to_text
from word_graph.graph_traversal import (
    PathResult,
    RandomWalker,
    ShortestPathSolver,
    WalkResult,
)

from .config import PageRankConfig

logger = logging.getLogger(__name__)


class WordGraphAnalyzer:
    """
    Facade over the word graph and its query components.

    Usage:
        analyzer = WordGraphAnalyzer.from_file("./corpus.txt", seed=42)
        print(analyzer.bridge_words("seek", "new").message)
        print(analyzer.random_walk().to_text())
    """

    def __init__(
        self,
        graph: WordGraph,
        seed: Optional[int] = None,
        pagerank_config: Optional[PageRankConfig] = None,
        corpus: Optional[CorpusDocument] = None,
    ):
        self.graph = graph
        self.seed = seed
        self.rng = random.Random(seed)
        self.corpus = corpus

        pagerank_config = pagerank_config or PageRankConfig()
        self.bridge_finder = BridgeWordFinder(graph)
        self.augmenter = TextAugmenter(self.bridge_finder)
        self.path_solver = ShortestPathSolver(graph)
        self.page_rank_engine = PageRankEngine(
            graph,
            damping=pagerank_config.damping,
            iterations=pagerank_config.iterations,
        )
        self.walker = RandomWalker(graph)

    @classmethod
    def from_text(
        cls,
        text: str,
        seed: Optional[int] = None,
        pagerank_config: Optional[PageRankConfig] = None,
    ) -> "WordGraphAnalyzer":
        """Build a session from raw corpus text."""
        corpus = CorpusDocument(
            doc_id=compute_content_hash(text),
            text=text,
            metadata={"char_count": len(text)},
        )
        return cls(build_graph_from_text(text), seed, pagerank_config, corpus)

    @classmethod
    def from_file(
        cls,
        path: str,
        seed: Optional[int] = None,
        pagerank_config: Optional[PageRankConfig] = None,
        max_bytes: Optional[int] = None,
    ) -> "WordGraphAnalyzer":
        """Build a session from a corpus file no larger than max_bytes."""
        corpus = load_corpus(path, max_bytes=max_bytes)
        return cls(build_graph_from_text(corpus.text), seed, pagerank_config, corpus)

    def bridge_words(self, word1: str, word2: str) -> BridgeResult:
        return self.bridge_finder.find(word1, word2)

    def augment(self, text: str) -> str:
        return self.augmenter.augment(text, self.rng)

    def shortest_path(self, source: str, target: str) -> PathResult:
        return self.path_solver.shortest_path(source, target)

    def shortest_paths_from(self, source: str) -> Dict[str, PathResult]:
        return self.path_solver.shortest_paths_from(source)

    def page_rank(self, word: str) -> float:
        return self.page_rank_engine.page_rank(word)

    def top_ranked(self, k: int = 10) -> List[Tuple[str, float]]:
        return self.page_rank_engine.top(k)

    def random_walk(self) -> WalkResult:
        return self.walker.walk(self.rng)

    def edges(self) -> List[Edge]:
        return self.graph.edges()

    def show(self, format_style: str = "arrow") -> str:
        return edge_list_to_text(self.graph, format_style)

    def describe(self) -> Dict:
        """Graph statistics plus corpus fingerprint."""
        stats = self.graph.get_stats()
        stats["doc_id"] = self.corpus.doc_id if self.corpus else None
        stats["seed"] = self.seed
        return stats

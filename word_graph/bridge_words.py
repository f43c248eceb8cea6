"""
Bridge-word lookup and bridge-based text augmentation.

A bridge word m between w1 and w2 is any word with edges w1 -> m and
m -> w2. The augmenter inserts one such word between every adjacent pair
of an input sentence that has bridges.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ingestion.normalize import normalize_text

from .graph_builder import WordGraph

logger = logging.getLogger(__name__)


class BridgeStatus(Enum):
    NO_SUCH_WORD = "no_such_word"
    NO_BRIDGE = "no_bridge"
    FOUND = "found"


@dataclass
class BridgeResult:
    """Outcome of a bridge-word query."""

    status: BridgeStatus
    word1: str
    word2: str
    bridges: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status == BridgeStatus.FOUND

    @property
    def message(self) -> str:
        """Human-readable answer."""
        if self.status == BridgeStatus.NO_SUCH_WORD:
            return "No word1 or word2 in the graph!"
        if self.status == BridgeStatus.NO_BRIDGE:
            return f"No bridge words from {self.word1} to {self.word2}!"
        return (
            f"The bridge words from {self.word1} to {self.word2} are: "
            f"{', '.join(self.bridges)}."
        )


class BridgeWordFinder:
    """
    Query bridge words over a built graph.

    Usage:
        finder = BridgeWordFinder(graph)
        result = finder.find("explore", "new")
        print(result.message)
    """

    def __init__(self, graph: WordGraph):
        self.graph = graph

    def candidates(self, word1: str, word2: str) -> List[str]:
        """
        Bridge words between two already-lowercased words.

        Returns:
            Bridges in ascending lexicographic order; empty if either word is
            unknown or nothing connects them
        """
        source = self.graph.index_of(word1)
        target = self.graph.index_of(word2)
        if source is None or target is None:
            return []

        adjacency = self.graph.adjacency
        bridges = [
            self.graph.word_at(mid)
            for mid, _ in adjacency[source]
            if any(succ == target for succ, _ in adjacency[mid])
        ]
        return sorted(bridges)

    def find(self, word1: str, word2: str) -> BridgeResult:
        """
        Look up bridge words from word1 to word2 (case-insensitive).

        Args:
            word1: Source word
            word2: Target word

        Returns:
            BridgeResult with status NO_SUCH_WORD, NO_BRIDGE or FOUND
        """
        word1 = word1.lower()
        word2 = word2.lower()

        if not self.graph.has_node(word1) or not self.graph.has_node(word2):
            return BridgeResult(BridgeStatus.NO_SUCH_WORD, word1, word2)

        bridges = self.candidates(word1, word2)
        if not bridges:
            return BridgeResult(BridgeStatus.NO_BRIDGE, word1, word2)

        return BridgeResult(BridgeStatus.FOUND, word1, word2, bridges)


class TextAugmenter:
    """
    Rewrite text by inserting a random bridge word between adjacent words.

    The random source is always passed in, so a seeded `random.Random`
    reproduces the same output.

    Usage:
        augmenter = TextAugmenter(BridgeWordFinder(graph))
        new_text = augmenter.augment("Seek to explore new", random.Random(42))
    """

    def __init__(self, finder: BridgeWordFinder):
        self.finder = finder

    def augment(self, text: str, rng) -> str:
        """
        Augment text with bridge words.

        Args:
            text: Input sentence (normalized with the corpus rules)
            rng: Random source exposing `choice`

        Returns:
            Space-joined augmented tokens, empty for empty input
        """
        tokens = normalize_text(text)
        if not tokens:
            return ""

        output: List[str] = []
        inserted = 0
        for current, following in zip(tokens, tokens[1:]):
            output.append(current)
            bridges = self.finder.candidates(current, following)
            if bridges:
                output.append(rng.choice(bridges))
                inserted += 1
        output.append(tokens[-1])

        logger.debug(f"Inserted {inserted} bridge words into {len(tokens)} tokens")
        return " ".join(output)

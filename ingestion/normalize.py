"""
Text normalization for word-graph construction.

Clean input beats clever graph queries. This module turns arbitrary text
into the lowercase token sequence every other component consumes:
- Line breaks become spaces
- Punctuation and non-Latin characters become spaces
- Everything is lowercased and split on whitespace runs

Pipeline: Raw text -> Cleaning -> Lowercase tokens
"""

import logging
import re
from typing import List

logger = logging.getLogger(__name__)

LINE_BREAK_PATTERN = re.compile(r"\r\n|[\n\r\x0b\x0c\x85\u2028\u2029]")
NON_WORD_PATTERN = re.compile(r"[^a-zA-Z\s]")
WHITESPACE_PATTERN = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """
    Strip everything except Latin letters and whitespace.

    Punctuation is a subset of the non-letter class, so one substitution
    covers both rules.

    Args:
        text: Raw text to clean

    Returns:
        Single-line text containing only letters and spaces

    Example:
        >>> clean_text("Hello,\\nWorld!")
        'Hello  World '
    """
    text = LINE_BREAK_PATTERN.sub(" ", text)
    return NON_WORD_PATTERN.sub(" ", text)


def normalize_text(text: str) -> List[str]:
    """
    Normalize raw text into an ordered list of lowercase tokens.

    Malformed input never raises; it simply yields fewer tokens.

    Args:
        text: Arbitrary text

    Returns:
        Tokens in reading order (possibly empty)

    Example:
        >>> normalize_text("To be, or not to be?")
        ['to', 'be', 'or', 'not', 'to', 'be']
    """
    cleaned = clean_text(text).lower()
    return [token for token in WHITESPACE_PATTERN.split(cleaned) if token]


class TextNormalizer:
    """
    Reusable normalizer, for callers that prefer an object seam.

    Usage:
        normalizer = TextNormalizer()
        tokens = normalizer.tokenize("The quick brown fox")
    """

    def tokenize(self, text: str) -> List[str]:
        """Tokenize text with the module rules."""
        tokens = normalize_text(text)
        logger.debug(f"Normalized {len(text)} chars into {len(tokens)} tokens")
        return tokens

"""
Corpus Ingestion Module.

This module prepares raw text for word-graph construction:
- Text cleaning and normalization into lowercase tokens
- Corpus file loading
- Content fingerprinting

Usage:
    from ingestion import load_corpus, normalize_text

    corpus = load_corpus("./corpus.txt")
    tokens = normalize_text(corpus.text)
"""

from .corpus_loader import (
    CorpusDocument,
    CorpusTooLargeError,
    compute_content_hash,
    extract_metadata_from_path,
    load_corpus,
)
from .normalize import TextNormalizer, clean_text, normalize_text

__all__ = [
    "TextNormalizer",
    "normalize_text",
    "clean_text",
    "CorpusDocument",
    "CorpusTooLargeError",
    "load_corpus",
    "compute_content_hash",
    "extract_metadata_from_path",
]

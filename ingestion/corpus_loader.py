"""
Corpus loading.

Reads a single plain-text corpus from disk and fingerprints it so a
session can tell which text its graph was built from.

Pipeline: Text file -> Read -> Content hash + metadata -> CorpusDocument
"""

import hashlib
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Union

from .normalize import normalize_text

logger = logging.getLogger(__name__)


@dataclass
class CorpusDocument:
    """A loaded corpus ready for graph construction."""

    doc_id: str
    text: str
    metadata: Dict = field(default_factory=dict)


def compute_content_hash(text: str, algorithm: str = "md5") -> str:
    """
    Compute a content hash for a corpus.

    Normalizes whitespace before hashing so that re-wrapped copies of the
    same text share an id.

    Args:
        text: Corpus text
        algorithm: Hash algorithm (md5, sha256)

    Returns:
        Hex digest of content hash

    Example:
        >>> compute_content_hash("Hello  World") == compute_content_hash("Hello World")
        True
    """
    normalized = " ".join(text.split())

    if algorithm == "sha256":
        return hashlib.sha256(normalized.encode("utf-8")).hexdigest()
    if algorithm == "md5":
        return hashlib.md5(normalized.encode("utf-8")).hexdigest()
    raise ValueError(f"Unknown hash algorithm: {algorithm}")


def extract_metadata_from_path(path: Path) -> Dict:
    """File metadata for a corpus path."""
    stat = path.stat()
    return {
        "source_path": str(path.absolute()),
        "filename": path.name,
        "filesize_bytes": stat.st_size,
        "modified_at": datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
    }


class CorpusTooLargeError(ValueError):
    """Raised when a corpus exceeds the configured size limit."""


def load_corpus(
    path: Union[str, Path],
    max_bytes: Optional[int] = None,
) -> CorpusDocument:
    """
    Load a corpus file.

    Args:
        path: Path to a UTF-8 text file
        max_bytes: Refuse files larger than this (None means no limit)

    Returns:
        CorpusDocument with text, content hash and metadata

    Raises:
        FileNotFoundError: If the path does not exist
        CorpusTooLargeError: If the file exceeds max_bytes
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Corpus file not found: {path}")

    size = file_path.stat().st_size
    if max_bytes is not None and size > max_bytes:
        raise CorpusTooLargeError(
            f"Corpus {file_path.name} is {size} bytes, limit is {max_bytes}"
        )

    text = file_path.read_text(encoding="utf-8", errors="replace")
    doc_id = compute_content_hash(text)

    metadata = extract_metadata_from_path(file_path)
    metadata.update(
        {
            "doc_id": doc_id,
            "loaded_at": datetime.now(timezone.utc).isoformat(),
            "char_count": len(text),
            "token_count": len(normalize_text(text)),
        }
    )

    logger.info(
        f"Loaded corpus {file_path.name}: {metadata['char_count']} chars, "
        f"{metadata['token_count']} tokens"
    )
    return CorpusDocument(doc_id=doc_id, text=text, metadata=metadata)

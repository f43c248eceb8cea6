"""
Configuration module for the Word Graph service.
Manages all environment variables and settings with validation.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from ranking.pagerank import DAMPING_FACTOR, ITERATIONS


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


@dataclass
class PageRankConfig:
    """PageRank scoring configuration."""
    damping: float = DAMPING_FACTOR
    iterations: int = ITERATIONS

    def __post_init__(self):
        if not 0.0 < self.damping <= 1.0:
            raise ValueError(f"damping must be in (0, 1], got {self.damping}")
        if self.iterations < 1:
            raise ValueError(f"iterations must be positive, got {self.iterations}")


@dataclass
class Settings:
    """Main application settings loaded from environment."""

    # Corpus settings
    CORPUS_PATH: Optional[str] = field(default_factory=lambda: os.getenv("CORPUS_PATH"))
    RANDOM_SEED: Optional[int] = field(default_factory=lambda: _optional_int("RANDOM_SEED"))
    # POST /graph/file only reads files under this directory
    CORPUS_DIR: str = field(default_factory=lambda: os.getenv("CORPUS_DIR", "data"))
    # Corpora are read and built on the event loop, so their size is capped
    MAX_CORPUS_BYTES: int = field(
        default_factory=lambda: int(os.getenv("MAX_CORPUS_BYTES", str(5 * 1024 * 1024)))
    )

    # API settings
    API_HOST: str = field(default_factory=lambda: os.getenv("API_HOST", "0.0.0.0"))
    API_PORT: int = field(default_factory=lambda: int(os.getenv("API_PORT", "8000")))

    # Application settings
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    METRICS_WINDOW: int = field(default_factory=lambda: int(os.getenv("METRICS_WINDOW", "1000")))

    # Nested configs
    pagerank: PageRankConfig = field(default_factory=PageRankConfig)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

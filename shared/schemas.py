"""
Pydantic schemas for API request/response models.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class QueryStatus(str, Enum):
    NO_SUCH_WORD = "no_such_word"
    NO_BRIDGE = "no_bridge"
    NO_PATH = "no_path"
    EMPTY_GRAPH = "empty_graph"
    FOUND = "found"
    OK = "ok"


class BuildGraphRequest(BaseModel):
    """Request model for building the session graph from text."""

    text: str = Field(..., description="Corpus text")
    seed: Optional[int] = Field(
        default=None, description="Seed for augmentation and random walks"
    )


class BuildGraphFromFileRequest(BaseModel):
    """Request model for building the session graph from a corpus file."""

    path: str = Field(..., description="Path to a UTF-8 text file")
    seed: Optional[int] = Field(
        default=None, description="Seed for augmentation and random walks"
    )


class GraphStatsResponse(BaseModel):
    """Statistics of the loaded graph."""

    doc_id: Optional[str] = None
    seed: Optional[int] = None
    total_nodes: int
    total_edges: int
    total_weight: int
    sink_nodes: int
    self_loops: int


class EdgeInfo(BaseModel):
    """A single weighted edge."""

    source: str
    target: str
    weight: int = Field(..., ge=1)


class EdgeListResponse(BaseModel):
    edges: List[EdgeInfo]
    total: int


class GraphTextResponse(BaseModel):
    style: str
    text: str


class BridgeWordsResponse(BaseModel):
    """Response model for bridge-word lookup."""

    status: QueryStatus
    word1: str
    word2: str
    bridges: List[str] = Field(default_factory=list)
    message: str


class AugmentRequest(BaseModel):
    text: str = Field(..., description="Sentence to augment with bridge words")


class AugmentResponse(BaseModel):
    text: str


class ShortestPathResponse(BaseModel):
    """Response model for shortest-path queries."""

    status: QueryStatus
    source: str
    target: str
    path: List[str] = Field(default_factory=list)
    cost: Optional[int] = None
    message: str


class PageRankResponse(BaseModel):
    word: str
    score: float
    message: str


class RankedWord(BaseModel):
    word: str
    score: float


class TopRankResponse(BaseModel):
    results: List[RankedWord]
    total_mass: float


class RandomWalkResponse(BaseModel):
    """Response model for random walks."""

    status: QueryStatus
    nodes: List[str] = Field(default_factory=list)
    text: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    graph_loaded: bool
    node_count: int
    edge_count: int


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[Any] = None
    context: Dict[str, Any] = Field(default_factory=dict)

"""
Main FastAPI application for the Word Graph service.

API with:
- Corpus loading (text or file) into a session graph
- Bridge words, augmentation, shortest path, PageRank and random walk queries
- Health checks
- Request tracing and latency metrics

Graph construction runs inline on the event loop, so corpora are capped at
MAX_CORPUS_BYTES (413 beyond it) and files are only read from CORPUS_DIR.
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.analyzer import WordGraphAnalyzer
from app.config import get_settings
from ingestion.corpus_loader import CorpusTooLargeError
from monitoring.latency_metrics import get_latency_collector
from shared.schemas import (
    AugmentRequest,
    AugmentResponse,
    BridgeWordsResponse,
    BuildGraphFromFileRequest,
    BuildGraphRequest,
    EdgeInfo,
    EdgeListResponse,
    ErrorResponse,
    GraphStatsResponse,
    GraphTextResponse,
    HealthResponse,
    PageRankResponse,
    QueryStatus,
    RandomWalkResponse,
    RankedWord,
    ShortestPathResponse,
    TopRankResponse,
)
from word_graph.graph_summarizer import format_page_rank

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

__version__ = "1.0.0"


class GraphNotLoadedError(Exception):
    """Raised when a query arrives before any corpus has been loaded."""


# Session graph; handlers never await mid-query, so the event loop
# serializes access to its random source.
_analyzer: Optional[WordGraphAnalyzer] = None


def get_analyzer() -> WordGraphAnalyzer:
    """Get the loaded session or fail with GraphNotLoadedError."""
    if _analyzer is None:
        raise GraphNotLoadedError("No corpus loaded; POST /graph first")
    return _analyzer


def set_analyzer(analyzer: Optional[WordGraphAnalyzer]) -> None:
    """Replace the session (None unloads it)."""
    global _analyzer
    _analyzer = analyzer


def _stats_response(analyzer: WordGraphAnalyzer) -> GraphStatsResponse:
    return GraphStatsResponse(**analyzer.describe())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(f"Starting Word Graph service v{__version__}")

    if settings.CORPUS_PATH:
        try:
            set_analyzer(
                WordGraphAnalyzer.from_file(
                    settings.CORPUS_PATH,
                    seed=settings.RANDOM_SEED,
                    pagerank_config=settings.pagerank,
                )
            )
        except FileNotFoundError as e:
            logger.warning(f"Startup corpus not loaded: {e}")

    yield

    # Shutdown
    logger.info("Shutting down Word Graph service")


app = FastAPI(
    title="Word Graph Service",
    description="Word-adjacency graph analytics API",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID for tracing."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id

    start_time = time.time()
    response = await call_next(request)

    # Log request
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        f"[{request_id}] {request.method} {request.url.path} "
        f"- {response.status_code} - {duration_ms:.1f}ms"
    )

    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(GraphNotLoadedError)
async def graph_not_loaded_handler(request: Request, exc: GraphNotLoadedError):
    """Handle queries against a missing graph."""
    return JSONResponse(
        status_code=409,
        content=ErrorResponse(error="Graph not loaded", detail=str(exc)).model_dump(),
    )


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    loaded = _analyzer is not None

    return HealthResponse(
        status="healthy" if loaded else "degraded",
        version=__version__,
        graph_loaded=loaded,
        node_count=_analyzer.graph.node_count if loaded else 0,
        edge_count=_analyzer.graph.edge_count if loaded else 0,
    )


def _resolve_corpus_path(requested: str) -> Path:
    """Resolve a client-supplied corpus path, refusing anything outside CORPUS_DIR."""
    root = Path(settings.CORPUS_DIR).resolve()
    target = (root / requested).resolve()
    if target != root and root not in target.parents:
        logger.warning(f"Refused corpus path outside {root}: {requested}")
        raise HTTPException(status_code=403, detail="Corpus path is outside the corpus directory")
    return target


@app.post("/graph", response_model=GraphStatsResponse)
async def build_graph_endpoint(body: BuildGraphRequest):
    """Build the session graph from corpus text."""
    size = len(body.text.encode("utf-8"))
    if size > settings.MAX_CORPUS_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Corpus is {size} bytes, limit is {settings.MAX_CORPUS_BYTES}",
        )

    with get_latency_collector(settings.METRICS_WINDOW).track("build"):
        analyzer = WordGraphAnalyzer.from_text(
            body.text, seed=body.seed, pagerank_config=settings.pagerank
        )
    set_analyzer(analyzer)
    return _stats_response(analyzer)


@app.post("/graph/file", response_model=GraphStatsResponse)
async def build_graph_from_file_endpoint(body: BuildGraphFromFileRequest):
    """Build the session graph from a corpus file under CORPUS_DIR."""
    path = _resolve_corpus_path(body.path)
    try:
        with get_latency_collector(settings.METRICS_WINDOW).track("build"):
            analyzer = WordGraphAnalyzer.from_file(
                str(path),
                seed=body.seed,
                pagerank_config=settings.pagerank,
                max_bytes=settings.MAX_CORPUS_BYTES,
            )
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CorpusTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except OSError as e:
        logger.exception(f"Corpus load failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    set_analyzer(analyzer)
    return _stats_response(analyzer)


@app.get("/graph", response_model=GraphStatsResponse)
async def graph_stats():
    """Statistics of the loaded graph."""
    return _stats_response(get_analyzer())


@app.get("/graph/edges", response_model=EdgeListResponse)
async def graph_edges():
    """Edge-list view of the loaded graph."""
    edges = [
        EdgeInfo(source=e.source, target=e.target, weight=e.weight)
        for e in get_analyzer().edges()
    ]
    return EdgeListResponse(edges=edges, total=len(edges))


@app.get("/graph/text", response_model=GraphTextResponse)
async def graph_text(style: str = Query(default="arrow", pattern="^(arrow|structured)$")):
    """Printable edge list of the loaded graph."""
    return GraphTextResponse(style=style, text=get_analyzer().show(style))


@app.get("/bridge-words", response_model=BridgeWordsResponse)
async def bridge_words_endpoint(word1: str, word2: str):
    """Bridge words from word1 to word2."""
    analyzer = get_analyzer()
    with get_latency_collector(settings.METRICS_WINDOW).track("bridge"):
        result = analyzer.bridge_words(word1, word2)

    return BridgeWordsResponse(
        status=QueryStatus(result.status.value),
        word1=result.word1,
        word2=result.word2,
        bridges=result.bridges,
        message=result.message,
    )


@app.post("/augment", response_model=AugmentResponse)
async def augment_endpoint(body: AugmentRequest):
    """Insert bridge words into a sentence."""
    analyzer = get_analyzer()
    with get_latency_collector(settings.METRICS_WINDOW).track("augment"):
        text = analyzer.augment(body.text)
    return AugmentResponse(text=text)


@app.get("/shortest-path", response_model=ShortestPathResponse)
async def shortest_path_endpoint(source: str, target: str):
    """Weighted shortest path between two words."""
    analyzer = get_analyzer()
    with get_latency_collector(settings.METRICS_WINDOW).track("shortest_path"):
        result = analyzer.shortest_path(source, target)

    return ShortestPathResponse(
        status=QueryStatus(result.status.value),
        source=result.source,
        target=result.target,
        path=result.path,
        cost=result.cost,
        message=result.message,
    )


@app.get("/pagerank", response_model=TopRankResponse)
async def top_pagerank_endpoint(top: int = Query(default=10, ge=1, le=1000)):
    """Highest PageRank words."""
    analyzer = get_analyzer()
    with get_latency_collector(settings.METRICS_WINDOW).track("pagerank"):
        ranked = analyzer.top_ranked(top)

    return TopRankResponse(
        results=[RankedWord(word=w, score=s) for w, s in ranked],
        total_mass=analyzer.page_rank_engine.total_mass(),
    )


@app.get("/pagerank/{word}", response_model=PageRankResponse)
async def pagerank_endpoint(word: str):
    """PageRank of a single word (0.0 when absent)."""
    analyzer = get_analyzer()
    with get_latency_collector(settings.METRICS_WINDOW).track("pagerank"):
        score = analyzer.page_rank(word)
    return PageRankResponse(
        word=word.lower(), score=score, message=format_page_rank(word, score)
    )


@app.post("/random-walk", response_model=RandomWalkResponse)
async def random_walk_endpoint():
    """Random edge-disjoint walk from a random start word."""
    analyzer = get_analyzer()
    with get_latency_collector(settings.METRICS_WINDOW).track("random_walk"):
        result = analyzer.random_walk()

    return RandomWalkResponse(
        status=QueryStatus(result.status.value),
        nodes=result.nodes,
        text=result.to_text(),
    )


@app.get("/metrics")
async def metrics_endpoint():
    """Get latency metrics."""
    return get_latency_collector(settings.METRICS_WINDOW).get_summary()


@app.post("/metrics/reset")
async def reset_metrics():
    """Reset latency metrics."""
    get_latency_collector(settings.METRICS_WINDOW).reset()
    return {"status": "reset"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)

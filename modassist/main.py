"""
Fallout 4 Modding Assistant - FastAPI application shell

Serves the knowledge base search over HTTP:
- Built-in knowledge modules held in an in-memory registry
- Multi-signal relevance ranking (modassist.search)
- Content quality analysis of the knowledge base

Run locally:
    python -m modassist.main
    (or: uvicorn modassist.main:app --reload)
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

# Load .env.local first (highest priority), then .env as fallback
env_local = Path(__file__).parent.parent / ".env.local"
env_file = Path(__file__).parent.parent / ".env"

if env_local.exists():
    load_dotenv(env_local, override=True)
elif env_file.exists():
    load_dotenv(env_file, override=True)

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from .analysis import analyze_content
from .config import SearchSettings
from .logging_config import setup_logging
from .models import KnowledgeEntry, KnowledgeModule, MatchSpan
from .ranking.highlight import get_match_context, merge_positions
from .registry import create_default_registry
from .search import search_knowledge_base

logger = logging.getLogger(__name__)

APP_VERSION = "0.2.0"
PORT = int(os.getenv("PORT", "8080"))
APP_START_TIME = datetime.now(timezone.utc)

settings = SearchSettings.from_env()
registry = create_default_registry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup"""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    setup_logging(
        log_file=os.getenv("LOG_FILE", "logs/modassist.log"),
        console_level=getattr(logging, log_level, logging.INFO),
        file_level=logging.DEBUG,
    )
    logger.info(
        f"Knowledge base ready: {len(registry.get_modules())} modules, "
        f"{len(registry.get_all_entries())} entries "
        f"(threshold={settings.relevance_threshold}, max_results={settings.max_results})"
    )
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title="Fallout 4 Modding Assistant API",
    description="Knowledge base search for Fallout 4 modding questions",
    version=APP_VERSION,
    lifespan=lifespan,
)


# Request/Response models
class HealthResponse(BaseModel):
    status: str
    version: str
    started_at: str
    uptime_seconds: float
    modules: int
    entries: int


class SearchRequest(BaseModel):
    query: str = Field(..., description="User question; empty queries return no results")
    relevance_threshold: Optional[float] = Field(None, ge=0.0, le=1.0)
    max_results: Optional[int] = Field(None, ge=0, le=50)


class SearchHit(BaseModel):
    entry: KnowledgeEntry
    score: float
    matches: List[MatchSpan]
    signals: Dict[str, float]
    context: Optional[str] = None  # snippet around the first content match


class SearchResponse(BaseModel):
    query: str
    results: List[SearchHit]


class DuplicateGroupResponse(BaseModel):
    entry_ids: List[str]
    similarity: float


class KeywordStatResponse(BaseModel):
    keyword: str
    count: int
    importance: float


class AnalysisResponse(BaseModel):
    quality_scores: Dict[str, int]
    duplicate_groups: List[DuplicateGroupResponse]
    keyword_stats: List[KeywordStatResponse]
    content_gaps: List[str]


@app.get("/health", response_model=HealthResponse)
async def health():
    now = datetime.now(timezone.utc)
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        started_at=APP_START_TIME.isoformat(),
        uptime_seconds=(now - APP_START_TIME).total_seconds(),
        modules=len(registry.get_modules()),
        entries=len(registry.get_all_entries()),
    )


@app.post("/search", response_model=SearchResponse)
async def search(request: SearchRequest):
    """Rank knowledge entries for a question."""
    overrides = request.model_dump(include={"relevance_threshold", "max_results"}, exclude_none=True)
    search_settings = settings.model_copy(update=overrides)

    results = search_knowledge_base(request.query, registry, search_settings)

    hits = []
    for result in results:
        content_spans = merge_positions(result.matches, "content")
        context = (
            get_match_context(result.entry.content, content_spans[0])
            if content_spans else None
        )
        hits.append(SearchHit(
            entry=result.entry,
            score=result.score,
            matches=result.matches,
            signals=result.signals,
            context=context,
        ))

    logger.info(f"Search '{request.query}' -> {len(hits)} results")
    return SearchResponse(query=request.query, results=hits)


@app.get("/modules", response_model=List[KnowledgeModule])
async def list_modules():
    return registry.get_modules()


@app.get("/modules/{module_id}/entries", response_model=List[KnowledgeEntry])
async def list_module_entries(module_id: str):
    if not registry.is_module_registered(module_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Module not found: {module_id}"
        )
    return registry.get_entries(module_id)


@app.get("/analysis", response_model=AnalysisResponse)
async def analysis():
    """Content quality report for the whole knowledge base."""
    try:
        report = analyze_content(registry.get_all_entries(), settings)
    except ValueError as e:
        logger.error(f"Content analysis failed: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return AnalysisResponse(
        quality_scores=report.quality_scores,
        duplicate_groups=[
            DuplicateGroupResponse(
                entry_ids=[entry.id for entry in group.entries],
                similarity=group.similarity,
            )
            for group in report.duplicate_groups
        ],
        keyword_stats=[
            KeywordStatResponse(keyword=s.keyword, count=s.count, importance=s.importance)
            for s in report.keyword_stats
        ],
        content_gaps=report.content_gaps,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "modassist.main:app",
        host="0.0.0.0",
        port=PORT,
        reload=True,  # Development only
    )

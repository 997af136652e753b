"""
FastAPI server exposing semantic code search as a tool endpoint.

The server owns one search engine, and therefore one in-memory index, for
its whole lifetime. Searches are serialized because the index is shared
mutable state.
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .config import SearchSettings
from .errors import ConfigurationError, QueryEmbeddingError
from .search import DEFAULT_TOP_K, SemanticSearchEngine, create_engine

_search_lock = asyncio.Lock()
_engine: SemanticSearchEngine | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if _engine is not None:
        _engine.index.clear()


app = FastAPI(
    title="codescope",
    description="Semantic search over source code",
    lifespan=lifespan,
)


def get_engine() -> SemanticSearchEngine:
    """Return the server's engine, building it from the environment once."""
    global _engine
    if _engine is None:
        _engine = create_engine(SearchSettings.from_env())
    return _engine


def set_engine(engine: SemanticSearchEngine | None) -> None:
    """Replace the server's engine (``None`` rebuilds it on next use)."""
    global _engine
    _engine = engine


class SearchRequest(BaseModel):
    """Request model for semantic search queries."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    top_k: int = Field(default=DEFAULT_TOP_K, ge=0, alias="topK")


@app.post("/api/search")
async def semantic_search(request: SearchRequest):
    """Search the code base and return ranked snippets as a JSON array."""
    try:
        engine = get_engine()
    except ConfigurationError as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)

    async with _search_lock:
        try:
            results = await asyncio.to_thread(
                engine.search, request.query, request.top_k
            )
        except QueryEmbeddingError as exc:
            return JSONResponse({"error": str(exc)}, status_code=502)

    return [result.to_json_dict() for result in results]


@app.get("/api/status")
async def search_status():
    """Report whether semantic search is enabled and how much is indexed."""
    try:
        engine = get_engine()
    except ConfigurationError as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)

    return {
        "semanticSearchEnabled": engine.is_available,
        "baseDirectory": getattr(engine.catalog, "base_dir", None),
        "indexedFiles": len(engine.index.indexed_files),
        "snippetCount": engine.index.snippet_count,
    }


def run_server(host: str = "127.0.0.1", port: int = 8000):
    """Run the FastAPI server."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()

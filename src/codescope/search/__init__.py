"""Search helpers for the in-memory snippet index."""

from .engine import DEFAULT_TOP_K, SemanticSearchEngine, create_engine
from .ranker import cosine_similarity, rank_snippets
from .scope import ScanState, ScopeResolver

__all__ = [
    "DEFAULT_TOP_K",
    "SemanticSearchEngine",
    "create_engine",
    "cosine_similarity",
    "rank_snippets",
    "ScanState",
    "ScopeResolver",
]

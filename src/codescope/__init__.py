"""
codescope - semantic code search over a source tree.

Source files are split into brace-aware chunks, embedded with Google GenAI
and kept in an in-memory index. Natural-language queries are answered by
cosine similarity, each hit annotated with its enclosing declaration.

Example usage:
    >>> from codescope import SearchSettings, create_engine
    >>> engine = create_engine(SearchSettings.from_env(base_dir="."))
    >>> results = engine.search("print message to console", top_k=5)
"""

from .config import SearchSettings
from .embeddings import EmbeddingProvider
from .errors import (
    CodeScopeError,
    ConfigurationError,
    EmbeddingError,
    QueryEmbeddingError,
)
from .indexing import SnippetIndex
from .models import SearchResult, Snippet
from .search import SemanticSearchEngine, create_engine

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "SearchSettings",
    # Engine
    "EmbeddingProvider",
    "SnippetIndex",
    "SemanticSearchEngine",
    "create_engine",
    # Models
    "SearchResult",
    "Snippet",
    # Errors
    "CodeScopeError",
    "ConfigurationError",
    "EmbeddingError",
    "QueryEmbeddingError",
]

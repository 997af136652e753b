"""
Search orchestration: index the catalog, embed the query, rank, and
attach scopes.
"""

from __future__ import annotations

import logging

from .ranker import rank_snippets
from .scope import ScopeResolver
from ..catalog import FileCatalog, SourceFileCatalog
from ..config import SearchSettings
from ..embeddings import EmbeddingProvider
from ..errors import EmbeddingError, QueryEmbeddingError
from ..indexing.chunker import BraceAwareChunker
from ..indexing.filters import IgnoreFilter
from ..indexing.index import SnippetIndex
from ..models import SearchResult


logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5


class SemanticSearchEngine:
    """Answer natural-language queries against an owned snippet index."""

    def __init__(
        self,
        index: SnippetIndex,
        catalog: FileCatalog,
        *,
        scope_resolver: ScopeResolver | None = None,
    ) -> None:
        self.index = index
        self.catalog = catalog
        self.scope_resolver = scope_resolver or ScopeResolver()

    @property
    def is_available(self) -> bool:
        return self.index.embedding_provider.is_available

    def search(self, query: str, top_k: int = DEFAULT_TOP_K) -> list[SearchResult]:
        """
        Return up to ``top_k`` snippets ranked by similarity to *query*.

        Without a configured embedding provider a single placeholder result
        is returned and nothing is indexed. Raises ``QueryEmbeddingError``
        when the query itself cannot be embedded.
        """
        if top_k < 0:
            raise ValueError("top_k must be >= 0")
        if not self.is_available:
            return [SearchResult.unavailable()]

        self.index.index_files(self.catalog.list_source_files())
        snippets = self.index.snapshot()
        if not snippets:
            logger.info("No snippets indexed, nothing to search.")
            return []
        if top_k == 0:
            return []

        try:
            query_vector = self.index.embedding_provider.embed_query(query)
        except EmbeddingError as exc:
            raise QueryEmbeddingError(f"Failed to embed query: {exc}") from exc

        return [
            SearchResult(
                file_path=snippet.file_path,
                start_line=snippet.start_line,
                end_line=snippet.end_line,
                content=snippet.content,
                score=score,
                parent_scope=self.scope_resolver.resolve(
                    snippet.file_path, snippet.start_line
                ),
            )
            for snippet, score in rank_snippets(snippets, query_vector, top_k)
        ]


def create_engine(
    settings: SearchSettings,
    *,
    embedding_provider: EmbeddingProvider | None = None,
) -> SemanticSearchEngine:
    """Wire an engine with a fresh index over ``settings.base_dir``."""
    index = SnippetIndex(
        embedding_provider or EmbeddingProvider(),
        chunker=BraceAwareChunker(
            chunk_size=settings.chunk_size, overlap=settings.chunk_overlap
        ),
        ignore_filter=IgnoreFilter(settings.ignore_patterns),
    )
    return SemanticSearchEngine(index, SourceFileCatalog(settings.base_dir))

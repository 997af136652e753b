"""Indexing components for codescope."""

from .chunker import BraceAwareChunker, CodeChunk
from .filters import DEFAULT_IGNORE_PATTERNS, IgnoreFilter, is_meaningful_code
from .index import IndexingResult, SnippetIndex

__all__ = [
    "BraceAwareChunker",
    "CodeChunk",
    "DEFAULT_IGNORE_PATTERNS",
    "IgnoreFilter",
    "is_meaningful_code",
    "IndexingResult",
    "SnippetIndex",
]

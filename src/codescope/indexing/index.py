"""
In-memory snippet index.

Files are chunked, filtered and embedded one chunk at a time. A file is
indexed at most once per index lifetime: editing it on disk afterwards does
not refresh its snippets until ``clear()`` is called.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .chunker import BraceAwareChunker
from .filters import IgnoreFilter, is_meaningful_code
from ..embeddings import EmbeddingProvider
from ..errors import EmbeddingError
from ..models import Snippet, SnippetKey


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexingResult:
    """Summary output for one ``index_files`` call."""

    indexed_files: int = 0
    skipped_files: int = 0
    snippets_written: int = 0
    failed_chunks: int = 0


class SnippetIndex:
    """Embedding-backed store of code snippets keyed by file and line range."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        *,
        chunker: BraceAwareChunker | None = None,
        ignore_filter: IgnoreFilter | None = None,
    ) -> None:
        self.embedding_provider = embedding_provider
        self.chunker = chunker or BraceAwareChunker()
        self.ignore_filter = ignore_filter or IgnoreFilter()
        self._snippets: dict[SnippetKey, Snippet] = {}
        self._indexed_files: set[str] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._snippets)

    @property
    def snippet_count(self) -> int:
        return len(self._snippets)

    @property
    def indexed_files(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._indexed_files)

    def is_indexed(self, path: str) -> bool:
        with self._lock:
            return path in self._indexed_files

    def snapshot(self) -> list[Snippet]:
        """Return the current snippets in insertion order."""
        with self._lock:
            return list(self._snippets.values())

    def clear(self) -> None:
        with self._lock:
            self._snippets.clear()
            self._indexed_files.clear()

    def index_files(self, paths: Iterable[str]) -> IndexingResult:
        """
        Chunk, filter and embed every new, non-ignored file in *paths*.

        Does nothing when the embedding provider is unavailable. A file that
        cannot be read is skipped and stays un-indexed; a chunk that fails to
        embed is skipped without affecting its siblings.
        """
        if not self.embedding_provider.is_available:
            logger.debug("Embedding provider unavailable, skipping indexing.")
            return IndexingResult()

        indexed_files = 0
        skipped_files = 0
        snippets_written = 0
        failed_chunks = 0

        with self._lock:
            for path in paths:
                if path in self._indexed_files:
                    continue
                if self.ignore_filter.should_ignore(path):
                    skipped_files += 1
                    continue

                try:
                    content = Path(path).read_text(encoding="utf-8-sig")
                except (OSError, UnicodeDecodeError) as exc:
                    logger.warning("Error indexing %s: %s", path, exc)
                    skipped_files += 1
                    continue

                written, failed = self._index_content(path, content)
                snippets_written += written
                failed_chunks += failed
                self._indexed_files.add(path)
                indexed_files += 1
                logger.debug("Indexed %s: %d snippets", path, written)

        if indexed_files:
            logger.info(
                "Indexed %d files (%d snippets, %d failed chunks)",
                indexed_files,
                snippets_written,
                failed_chunks,
            )
        return IndexingResult(
            indexed_files=indexed_files,
            skipped_files=skipped_files,
            snippets_written=snippets_written,
            failed_chunks=failed_chunks,
        )

    def _index_content(self, path: str, content: str) -> tuple[int, int]:
        written = 0
        failed = 0
        # The chunker can repeat a window at end of file; embed each range once.
        seen: set[SnippetKey] = set()
        for chunk in self.chunker.chunk(content):
            if not is_meaningful_code(chunk.text):
                continue
            key = (path, chunk.start_line, chunk.end_line)
            if key in seen or key in self._snippets:
                continue
            seen.add(key)
            try:
                embedding = self.embedding_provider.embed_document(chunk.text)
            except EmbeddingError as exc:
                logger.warning(
                    "Failed to embed %s:%d-%d: %s",
                    path,
                    chunk.start_line,
                    chunk.end_line,
                    exc,
                )
                failed += 1
                continue
            self._snippets[key] = Snippet(
                file_path=path,
                content=chunk.text,
                start_line=chunk.start_line,
                end_line=chunk.end_line,
                embedding=tuple(embedding),
            )
            written += 1
        return written, failed

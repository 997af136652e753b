"""
Embedding provider for vector-based semantic code search.

Wraps the Google GenAI embedding API for single-text document and query
embedding with configurable model and dimensions. Missing credentials put
the provider in a degraded mode instead of raising, so callers can check
``is_available`` before doing any work.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from google.genai import Client as GenAIClient

from .config import env_int
from .errors import ConfigurationError, EmbeddingError


logger = logging.getLogger(__name__)

_DEFAULT_MODEL = "gemini-embedding-001"
_DEFAULT_DIM = 768


class EmbeddingProvider:
    """Generate text embeddings via Google GenAI, one text per call."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        dim: int | None = None,
        client: Any | None = None,
    ) -> None:
        self.model = model or os.getenv("CODESCOPE_EMBEDDING_MODEL", _DEFAULT_MODEL)
        self.dim = dim or env_int("CODESCOPE_EMBEDDING_DIM", _DEFAULT_DIM)
        if self.dim <= 0:
            raise ConfigurationError(
                f"CODESCOPE_EMBEDDING_DIM must be > 0, got {self.dim}"
            )
        self._client: Any | None = None

        if client is not None:
            self._client = client
            return

        resolved_key = api_key or os.getenv("GOOGLE_API_KEY")
        if not resolved_key:
            logger.warning(
                "GOOGLE_API_KEY not found. Semantic search will be unavailable."
            )
            return

        try:
            self._client = GenAIClient(api_key=resolved_key)
        except Exception as exc:
            logger.warning("Failed to initialize the GenAI client: %s", exc)
            self._client = None

    @property
    def is_available(self) -> bool:
        """True when a client is configured and embedding calls can be made."""
        return self._client is not None

    def embed_document(self, text: str) -> list[float]:
        """Embed one code chunk for storage in the index."""
        return self._embed(text, task_type="RETRIEVAL_DOCUMENT")

    def embed_query(self, query: str) -> list[float]:
        """Embed a single query text for retrieval."""
        return self._embed(query, task_type="RETRIEVAL_QUERY")

    def _embed(self, text: str, *, task_type: str) -> list[float]:
        if self._client is None:
            raise EmbeddingError("Embedding provider is not configured.")
        try:
            result = self._client.models.embed_content(
                model=self.model,
                contents=[text],
                config={
                    "task_type": task_type,
                    "output_dimensionality": self.dim,
                },
            )
            values = list(result.embeddings[0].values)
        except Exception as exc:
            raise EmbeddingError(f"Embedding call failed: {exc}") from exc
        if not values:
            raise EmbeddingError("Embedding provider returned an empty vector.")
        return values

"""
Exception hierarchy for codescope.
"""

from __future__ import annotations


class CodeScopeError(Exception):
    """Base class for all codescope errors."""


class ConfigurationError(CodeScopeError):
    """Raised when a setting cannot be parsed."""


class EmbeddingError(CodeScopeError):
    """Raised when the embedding provider fails to embed a text."""


class QueryEmbeddingError(EmbeddingError):
    """Raised when the query text of a search cannot be embedded."""

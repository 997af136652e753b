"""
Cosine-similarity ranking over indexed snippets.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..models import Snippet


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Return ``dot(a, b) / (|a| * |b|)``, or 0.0 when either norm is zero."""
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise ValueError(
            f"Embedding dimensions differ: {va.shape[0]} != {vb.shape[0]}"
        )
    denom = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denom == 0.0:
        return 0.0
    return float(np.dot(va, vb) / denom)


def rank_snippets(
    snippets: Sequence[Snippet],
    query_vector: Sequence[float],
    top_k: int,
) -> list[tuple[Snippet, float]]:
    """
    Score every snippet against the query and keep the best ``top_k``.

    The sort is stable, so equal scores keep the order of *snippets*.
    """
    if top_k <= 0 or not snippets:
        return []
    scored = [
        (snippet, cosine_similarity(query_vector, snippet.embedding))
        for snippet in snippets
    ]
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored[:top_k]

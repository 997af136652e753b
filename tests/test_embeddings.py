"""Tests for the embedding provider."""

from __future__ import annotations

import os

import pytest

import codescope.embeddings as embeddings_module
from codescope.embeddings import EmbeddingProvider
from codescope.errors import ConfigurationError, EmbeddingError

from conftest import FakeGenAIClient


# ---------------------------------------------------------------------------
# Unit tests (mock-based, no API key needed)
# ---------------------------------------------------------------------------


def test_embed_document_uses_document_task_type() -> None:
    client = FakeGenAIClient()
    provider = EmbeddingProvider(client=client, dim=4)

    embedding = provider.embed_document("public class Greeter { }")

    assert len(embedding) == 4
    call = client.models.calls[0]
    assert call["contents"] == ["public class Greeter { }"]
    assert call["config"]["task_type"] == "RETRIEVAL_DOCUMENT"


def test_embed_query_uses_query_task_type() -> None:
    client = FakeGenAIClient()
    provider = EmbeddingProvider(client=client, dim=4)

    result = provider.embed_query("search query")

    assert len(result) == 4
    call = client.models.calls[0]
    assert call["config"]["task_type"] == "RETRIEVAL_QUERY"


def test_env_overrides(monkeypatch) -> None:
    client = FakeGenAIClient()
    monkeypatch.setenv("CODESCOPE_EMBEDDING_MODEL", "custom-model-001")
    monkeypatch.setenv("CODESCOPE_EMBEDDING_DIM", "256")

    provider = EmbeddingProvider(client=client)

    assert provider.model == "custom-model-001"
    assert provider.dim == 256

    provider.embed_document("test")
    call = client.models.calls[0]
    assert call["model"] == "custom-model-001"
    assert call["config"]["output_dimensionality"] == 256


def test_missing_api_key_degrades_instead_of_raising(monkeypatch) -> None:
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

    provider = EmbeddingProvider(api_key=None, client=None)

    assert provider.is_available is False
    with pytest.raises(EmbeddingError, match="not configured"):
        provider.embed_query("anything")


def test_client_construction_failure_degrades(monkeypatch) -> None:
    def _broken_client(*args, **kwargs):
        raise RuntimeError("bad credentials format")

    monkeypatch.setattr(embeddings_module, "GenAIClient", _broken_client)

    provider = EmbeddingProvider(api_key="not-a-key")

    assert provider.is_available is False


def test_provider_errors_are_wrapped() -> None:
    provider = EmbeddingProvider(client=FakeGenAIClient(fail_on=("boom",)), dim=4)

    with pytest.raises(EmbeddingError, match="RESOURCE_EXHAUSTED"):
        provider.embed_document("boom")


# ---------------------------------------------------------------------------
# Real API integration test (skipped unless GOOGLE_API_KEY is set)
# ---------------------------------------------------------------------------


@pytest.mark.skipif(
    not os.getenv("GOOGLE_API_KEY"),
    reason="GOOGLE_API_KEY not set, skipping real embedding test",
)
def test_real_embedding_api() -> None:
    provider = EmbeddingProvider(dim=128)

    embedding = provider.embed_document("public void PrintMessage() { }")
    assert len(embedding) == 128
    assert all(isinstance(v, float) for v in embedding)

    query_emb = provider.embed_query("print message")
    assert len(query_emb) == 128


@pytest.mark.parametrize("raw", ["wide", "0"])
def test_invalid_dimension_is_a_configuration_error(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("CODESCOPE_EMBEDDING_DIM", raw)

    with pytest.raises(ConfigurationError, match="CODESCOPE_EMBEDDING_DIM"):
        EmbeddingProvider(client=FakeGenAIClient())

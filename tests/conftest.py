from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from codescope.embeddings import EmbeddingProvider


FAKE_DIM = 64


def bag_of_words(text: str, dim: int = FAKE_DIM) -> list[float]:
    """Deterministic embedding: hashed word counts."""
    vector = [0.0] * dim
    for token in re.findall(r"[a-z]+", text.lower()):
        bucket = int(hashlib.md5(token.encode("utf-8")).hexdigest(), 16) % dim
        vector[bucket] += 1.0
    return vector


@dataclass
class FakeEmbedding:
    values: list[float]


@dataclass
class FakeEmbedResult:
    embeddings: list[FakeEmbedding]


class FakeModels:
    """Records calls and returns bag-of-words embeddings."""

    def __init__(self, fail_on: tuple[str, ...] = ()) -> None:
        self.calls: list[dict[str, Any]] = []
        self.fail_on = fail_on

    def embed_content(
        self, *, model: str, contents: list[str], config: dict
    ) -> FakeEmbedResult:
        self.calls.append({"model": model, "contents": contents, "config": config})
        for text in contents:
            if any(marker in text for marker in self.fail_on):
                raise RuntimeError("429 RESOURCE_EXHAUSTED")
        dim = config.get("output_dimensionality", FAKE_DIM)
        return FakeEmbedResult(
            embeddings=[FakeEmbedding(values=bag_of_words(t, dim)) for t in contents]
        )


class FakeGenAIClient:
    def __init__(self, fail_on: tuple[str, ...] = ()) -> None:
        self.models = FakeModels(fail_on=fail_on)


class ListCatalog:
    """File catalog returning a fixed list of paths."""

    def __init__(self, paths: list[str]) -> None:
        self.paths = paths
        self.base_dir = str(Path(paths[0]).parent) if paths else "."

    def list_source_files(self) -> list[str]:
        return list(self.paths)


GREETER_SOURCE = """\
public class Greeter {
    private readonly string _name;

    public Greeter(string name)
    {
        _name = name;
    }

    // Prints a greeting to the console.
    public void PrintMessage()
    {
        var message = "Hello, " + _name;
        Console.WriteLine(message);
    }

    public string Name
    {
        get { return _name; }
    }
}
"""


@pytest.fixture()
def fake_client() -> FakeGenAIClient:
    return FakeGenAIClient()


@pytest.fixture()
def provider(fake_client: FakeGenAIClient) -> EmbeddingProvider:
    return EmbeddingProvider(client=fake_client, dim=FAKE_DIM)


@pytest.fixture()
def unavailable_provider(monkeypatch) -> EmbeddingProvider:
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    return EmbeddingProvider()


@pytest.fixture()
def greeter_file(tmp_path: Path) -> Path:
    path = tmp_path / "Greeter.cs"
    path.write_text(GREETER_SOURCE)
    return path

"""CLI tests for the search and status commands."""

from __future__ import annotations

import json
from pathlib import Path

import codescope.main as main_module
from codescope.embeddings import EmbeddingProvider
from codescope.search import create_engine
from typer.testing import CliRunner


def _patch_engine(monkeypatch, provider: EmbeddingProvider) -> None:
    def fake_create_engine(settings, *, embedding_provider=None):
        return create_engine(settings, embedding_provider=provider)

    monkeypatch.setattr(main_module, "create_engine", fake_create_engine)


def test_search_command_prints_json(
    monkeypatch, provider: EmbeddingProvider, greeter_file: Path
) -> None:
    _patch_engine(monkeypatch, provider)

    runner = CliRunner()
    result = runner.invoke(
        main_module.app,
        [
            "search",
            "--query",
            "print message to console",
            "--base-dir",
            str(greeter_file.parent),
            "--json",
        ],
    )

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert len(data) == 1
    assert data[0]["filePath"].endswith("Greeter.cs")
    assert data[0]["startLine"] == 1


def test_search_command_renders_panels(
    monkeypatch, provider: EmbeddingProvider, greeter_file: Path
) -> None:
    _patch_engine(monkeypatch, provider)

    runner = CliRunner()
    result = runner.invoke(
        main_module.app,
        ["search", "-q", "greeting", "-d", str(greeter_file.parent)],
    )

    assert result.exit_code == 0
    assert "Greeter.cs:1-20" in result.stdout


def test_search_command_without_credentials_prints_sentinel(
    monkeypatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

    runner = CliRunner()
    result = runner.invoke(
        main_module.app,
        ["search", "-q", "anything", "-d", str(tmp_path), "--json"],
    )

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [r["filePath"] for r in data] == ["semantic_search_unavailable"]


def test_search_command_bad_base_dir_exits_nonzero(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        main_module.app,
        ["search", "-q", "anything", "-d", str(tmp_path / "missing")],
    )

    assert result.exit_code == 1
    assert "Directory not found" in result.stdout


def test_search_command_bad_embedding_dim_exits_nonzero(
    monkeypatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("CODESCOPE_EMBEDDING_DIM", "wide")

    runner = CliRunner()
    result = runner.invoke(
        main_module.app, ["search", "-q", "anything", "-d", str(tmp_path)]
    )

    assert result.exit_code == 1
    assert "CODESCOPE_EMBEDDING_DIM" in result.stdout


def test_status_command_reports_unavailable(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

    runner = CliRunner()
    result = runner.invoke(main_module.app, ["status", "-d", str(tmp_path)])

    assert result.exit_code == 0
    assert "unavailable" in result.stdout

"""
Configuration helpers for the semantic search engine.

Every setting resolves with the same precedence:

1) explicit override
2) ``CODESCOPE_*`` environment variable
3) built-in default
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigurationError


ENV_BASE_DIR = "CODESCOPE_BASE_DIR"
ENV_CHUNK_SIZE = "CODESCOPE_CHUNK_SIZE"
ENV_CHUNK_OVERLAP = "CODESCOPE_CHUNK_OVERLAP"
ENV_IGNORE_PATTERNS = "CODESCOPE_IGNORE_PATTERNS"

DEFAULT_CHUNK_SIZE = 200
DEFAULT_CHUNK_OVERLAP = 20


def env_int(name: str, default: int) -> int:
    """Read an integer env var, raising ``ConfigurationError`` when malformed."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def resolve_base_dir(override_path: str | None = None) -> str:
    """Resolve the directory whose source files are searched."""
    raw_path = override_path or os.getenv(ENV_BASE_DIR) or "."
    resolved = Path(raw_path).expanduser().resolve()
    if not resolved.is_dir():
        raise ConfigurationError(f"Directory not found: {resolved}")
    return str(resolved)


def resolve_ignore_patterns(override: list[str] | None = None) -> tuple[str, ...]:
    """Return user ignore patterns, split from a comma separated env var."""
    if override is not None:
        return tuple(p.strip() for p in override if p.strip())
    raw = os.getenv(ENV_IGNORE_PATTERNS, "")
    return tuple(p.strip() for p in raw.split(",") if p.strip())


@dataclass(frozen=True)
class SearchSettings:
    """Resolved settings for one search engine instance."""

    base_dir: str
    chunk_size: int = DEFAULT_CHUNK_SIZE
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP
    ignore_patterns: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ConfigurationError(
                f"{ENV_CHUNK_SIZE} must be > 0, got {self.chunk_size}"
            )
        if not 0 <= self.chunk_overlap < self.chunk_size:
            raise ConfigurationError(
                f"{ENV_CHUNK_OVERLAP} must be >= 0 and smaller than "
                f"{ENV_CHUNK_SIZE} ({self.chunk_size}), got {self.chunk_overlap}"
            )

    @classmethod
    def from_env(
        cls,
        *,
        base_dir: str | None = None,
        chunk_size: int | None = None,
        chunk_overlap: int | None = None,
        ignore_patterns: list[str] | None = None,
    ) -> SearchSettings:
        return cls(
            base_dir=resolve_base_dir(base_dir),
            chunk_size=(
                chunk_size
                if chunk_size is not None
                else env_int(ENV_CHUNK_SIZE, DEFAULT_CHUNK_SIZE)
            ),
            chunk_overlap=(
                chunk_overlap
                if chunk_overlap is not None
                else env_int(ENV_CHUNK_OVERLAP, DEFAULT_CHUNK_OVERLAP)
            ),
            ignore_patterns=resolve_ignore_patterns(ignore_patterns),
        )

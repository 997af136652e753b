"""
Source file catalog for the semantic search engine.

The catalog owns the base-directory boundary: it only ever lists files
under the configured base directory.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol


SOURCE_FILE_SUFFIXES: tuple[str, ...] = (
    ".cs",
    ".vb",
    ".fs",
    ".fsx",
    ".fsi",
    ".cshtml",
    ".vbhtml",
    ".razor",
)


class FileCatalog(Protocol):
    """Supplies the absolute paths of the files eligible for indexing."""

    def list_source_files(self) -> list[str]:
        """Return absolute source file paths under the base directory."""


class SourceFileCatalog:
    """Walk a base directory for source files with known suffixes."""

    def __init__(
        self,
        base_dir: str,
        *,
        suffixes: tuple[str, ...] = SOURCE_FILE_SUFFIXES,
    ) -> None:
        resolved = Path(base_dir).expanduser().resolve()
        if not resolved.is_dir():
            raise ValueError(f"No such directory: {resolved}")
        self.base_dir = str(resolved)
        self.suffixes = tuple(s.lower() for s in suffixes)

    def is_path_safe(self, path: str) -> bool:
        """True when *path* resolves inside the base directory."""
        if not path:
            return False
        full_path = Path(path).resolve()
        return full_path == Path(self.base_dir) or Path(self.base_dir) in full_path.parents

    def relative_path(self, path: str) -> str:
        return os.path.relpath(path, self.base_dir)

    def list_source_files(self) -> list[str]:
        files: list[str] = []
        for dirpath, dirnames, filenames in os.walk(self.base_dir):
            dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
            for name in sorted(filenames):
                if name.lower().endswith(self.suffixes):
                    files.append(os.path.join(dirpath, name))
        return files

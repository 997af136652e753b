"""
Chunking utilities for indexing source code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CodeChunk:
    """A window of source lines with 1-based inclusive line numbers."""

    text: str
    start_line: int
    end_line: int


class BraceAwareChunker:
    """
    Line-based chunker that only splits at brace depth zero.

    A window closes when it reaches ``chunk_size`` lines at depth zero, or
    as soon as a non-blank line leaves the depth at zero. The second rule
    closes every balanced top-level statement eagerly, which yields many
    small windows. Each new window is seeded with the last ``overlap`` lines
    of the window that just closed.
    """

    def __init__(self, chunk_size: int = 200, overlap: int = 20) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        if overlap < 0:
            raise ValueError("overlap must be >= 0")
        if overlap >= chunk_size:
            raise ValueError("overlap must be smaller than chunk_size")

        self.chunk_size = chunk_size
        self.overlap = overlap

    def chunk(self, text: str) -> list[CodeChunk]:
        lines = text.splitlines()
        line_numbers = list(range(1, len(lines) + 1))

        chunks: list[CodeChunk] = []
        # Indices into ``lines`` for the open window.
        window: list[int] = []
        depth = 0

        for idx, line in enumerate(lines):
            window.append(idx)
            depth += line.count("{") - line.count("}")

            at_size_limit = len(window) >= self.chunk_size and depth == 0
            closes_statement = depth == 0 and bool(line.strip())
            if at_size_limit or closes_statement:
                chunks.append(self._make_chunk(lines, line_numbers, window))
                window = window[-self.overlap :] if self.overlap else []

        # Whatever is left open at end of file is emitted as-is, even when it
        # only repeats the overlap seed.
        if window:
            chunks.append(self._make_chunk(lines, line_numbers, window))

        return chunks

    @staticmethod
    def _make_chunk(
        lines: list[str], line_numbers: list[int], window: list[int]
    ) -> CodeChunk:
        return CodeChunk(
            text="\n".join(lines[idx] for idx in window),
            start_line=line_numbers[window[0]],
            end_line=line_numbers[window[-1]],
        )

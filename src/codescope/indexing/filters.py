"""
File and chunk filters applied before embedding.
"""

from __future__ import annotations

import re
from collections.abc import Iterable


DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    "**/obj/**",
    "**/bin/**",
    "**/*.generated.cs",
    "**/*.designer.cs",
    "**/*.g.cs",
    "**/*.AssemblyInfo.cs",
)

_COMMENT_PREFIXES: tuple[str, ...] = ("//", "/*", "*")
_STRUCTURAL_KEYWORD_RE = re.compile(
    r"\b(?:class|interface|struct|enum|void|async|return|public|private|protected)\b"
)
_MIN_MEANINGFUL_LINES = 3


def _normalize_path(path: str) -> str:
    return path.replace("\\", "/")


def wildcard_to_regex(pattern: str) -> re.Pattern[str]:
    """
    Compile a glob-style ignore pattern to an anchored regex.

    ``**`` matches any sequence including path separators, ``*`` any
    sequence within one path segment and ``?`` a single character.
    """
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append(r"[^/\\]*")
            i += 1
        elif pattern[i] == "?":
            parts.append(".")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("^" + "".join(parts) + "$", re.IGNORECASE)


class IgnoreFilter:
    """Decide whether a file is excluded from indexing."""

    def __init__(
        self,
        user_patterns: Iterable[str] = (),
        *,
        default_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
    ) -> None:
        self.default_patterns = tuple(default_patterns)
        self.user_patterns = tuple(user_patterns)
        normalized_patterns = [
            _normalize_path(pattern) for pattern in self.patterns
        ]
        self._compiled = [
            (wildcard_to_regex(pattern), "/" not in pattern)
            for pattern in normalized_patterns
        ]

    @property
    def patterns(self) -> tuple[str, ...]:
        return self.default_patterns + self.user_patterns

    def should_ignore(self, path: str) -> bool:
        normalized = _normalize_path(path)
        file_name = normalized.rsplit("/", 1)[-1]
        for regex, name_only in self._compiled:
            if regex.match(normalized):
                return True
            if name_only and regex.match(file_name):
                return True
        return False


def is_meaningful_code(chunk: str) -> bool:
    """
    Return True when a chunk carries enough code to be worth embedding.

    A chunk qualifies with at least three non-blank, non-comment lines, or
    with any code line containing a structural keyword such as ``class`` or
    ``return``. Keywords inside comment lines do not count.
    """
    code_lines = [
        line
        for line in chunk.split("\n")
        if line.strip() and not line.lstrip().startswith(_COMMENT_PREFIXES)
    ]
    if len(code_lines) >= _MIN_MEANINGFUL_LINES:
        return True
    return any(_STRUCTURAL_KEYWORD_RE.search(line) for line in code_lines)

"""
Best-effort reconstruction of the declaration scope around a line.

The resolver scans the lines above a target line from the bottom up. Type
and namespace declarations are collected into a dotted path; the first
method declaration met ends the scan. Because a method sits closer to the
target line than its enclosing type, code inside a method body resolves to
the method name alone.
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path


logger = logging.getLogger(__name__)

UNKNOWN_SCOPE = "Unknown"

_TYPE_KEYWORDS: tuple[str, ...] = ("class", "interface", "struct", "enum")
_METHOD_MARKERS: tuple[str, ...] = (
    "void ",
    "async ",
    "Task ",
    "public ",
    "private ",
    "protected ",
    "internal ",
)
_NAME_TERMINATORS: tuple[str, ...] = (" ", "{", ":", "(")


class ScanState(enum.Enum):
    SEEKING_DECLARATION = "seeking_declaration"
    FOUND_METHOD = "found_method"
    DONE = "done"


def extract_name(line: str, keyword: str) -> str:
    """Return the identifier following ``keyword`` on *line*, or ``""``."""
    keyword_index = line.find(keyword + " ")
    if keyword_index < 0:
        return ""
    after_keyword = line[keyword_index + len(keyword) + 1 :].strip()
    end = len(after_keyword)
    for terminator in _NAME_TERMINATORS:
        pos = after_keyword.find(terminator)
        if 0 <= pos < end:
            end = pos
    return after_keyword[:end].strip()


def extract_method_name(line: str) -> str:
    """Return the word directly before the first ``(`` on *line*, or ``""``."""
    paren_index = line.find("(")
    if paren_index <= 0:
        return ""
    before_paren = line[:paren_index].strip()
    last_space = before_paren.rfind(" ")
    if 0 <= last_space < len(before_paren) - 1:
        return before_paren[last_space + 1 :].strip()
    return ""


def _declaration_name(line: str) -> str | None:
    if line.startswith("namespace "):
        return extract_name(line, "namespace")
    for keyword in _TYPE_KEYWORDS:
        if keyword + " " in line:
            return extract_name(line, keyword)
    return None


def _is_method_declaration(line: str) -> bool:
    return (
        any(marker in line for marker in _METHOD_MARKERS)
        and "(" in line
        and not line.startswith(("//", "/*"))
    )


def scan_step(state: ScanState, line: str, scope_parts: list[str]) -> ScanState:
    """
    Consume one line (already left-stripped) of the upward scan.

    Declaration names are prepended to *scope_parts*. A method declaration
    with a readable name is prepended as well and moves the scan to
    ``FOUND_METHOD``; any step taken from ``FOUND_METHOD`` ends the scan.
    """
    if state is not ScanState.SEEKING_DECLARATION:
        return ScanState.DONE

    name = _declaration_name(line)
    if name is not None:
        if name:
            scope_parts.insert(0, name)
        return ScanState.SEEKING_DECLARATION

    if _is_method_declaration(line):
        method_name = extract_method_name(line)
        if method_name:
            scope_parts.insert(0, method_name)
            return ScanState.FOUND_METHOD

    return ScanState.SEEKING_DECLARATION


def resolve_scope_from_lines(lines: list[str], line_number: int) -> str:
    """Resolve the scope of 1-based *line_number* given the file's lines."""
    scope_parts: list[str] = []
    lines_above = reversed(lines[: max(line_number - 1, 0)])
    state = ScanState.SEEKING_DECLARATION
    while state is ScanState.SEEKING_DECLARATION:
        line = next(lines_above, None)
        if line is None:
            state = ScanState.DONE
        else:
            state = scan_step(state, line.lstrip(), scope_parts)
    return ".".join(scope_parts)


class ScopeResolver:
    """Resolve the enclosing declaration path for a line of a source file."""

    def resolve(self, file_path: str, line_number: int) -> str:
        try:
            text = Path(file_path).read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Cannot resolve scope for %s: %s", file_path, exc)
            return UNKNOWN_SCOPE
        return resolve_scope_from_lines(text.splitlines(), line_number)

"""
Data models shared by indexing and search.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


UNAVAILABLE_FILE_PATH = "semantic_search_unavailable"
UNAVAILABLE_MESSAGE = (
    "Semantic search is unavailable because embedding provider credentials "
    "are not configured. Set GOOGLE_API_KEY to enable it."
)

SnippetKey = tuple[str, int, int]


@dataclass(frozen=True)
class Snippet:
    """An embedded chunk of a source file."""

    file_path: str
    content: str
    start_line: int
    end_line: int
    embedding: tuple[float, ...]

    @property
    def key(self) -> SnippetKey:
        return (self.file_path, self.start_line, self.end_line)


class SearchResult(BaseModel):
    """A ranked snippet returned to the caller of a semantic search."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_path: str = Field(description="Path of the file containing the snippet")
    start_line: int = Field(description="First line of the snippet (1-based)")
    end_line: int = Field(description="Last line of the snippet (1-based)")
    content: str = Field(description="Snippet source text")
    score: float = Field(description="Cosine similarity to the query")
    parent_scope: str = Field(
        default="", description="Dotted path of enclosing declarations"
    )

    @classmethod
    def unavailable(cls) -> SearchResult:
        """Placeholder returned when no embedding provider is configured."""
        return cls(
            file_path=UNAVAILABLE_FILE_PATH,
            start_line=0,
            end_line=0,
            content=UNAVAILABLE_MESSAGE,
            score=0.0,
            parent_scope="",
        )

    def to_json_dict(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)

"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    """Tree entry type as reported by the GitHub trees API."""

    FILE = "blob"
    DIRECTORY = "tree"


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A single node from the recursive tree listing."""

    path: str
    kind: EntryKind
    content_ref: str | None = None  # blob API URL

    @property
    def is_fetchable(self) -> bool:
        return self.kind is EntryKind.FILE and bool(self.content_ref)


@dataclass(frozen=True, slots=True)
class TreeListing:
    """Result of one recursive tree call."""

    entries: list[TreeEntry]
    truncated: bool = False


@dataclass(frozen=True, slots=True)
class RepoMetadata:
    """High-level metadata about a GitHub repository."""

    owner: str
    name: str
    default_branch: str


@dataclass(frozen=True, slots=True)
class RankedFile:
    """A fetchable tree entry annotated with its importance score."""

    path: str
    content_ref: str
    score: int


@dataclass(frozen=True, slots=True)
class ExcerptOutcome:
    """Result of fetching one selected file.

    Exactly one of the three states holds: ``content`` is set, ``error`` is
    set, or both are ``None`` (the host returned an empty body).
    """

    path: str
    content: str | None = None
    error: str | None = None

    def render(self, max_chars: int) -> str:
        if self.error is not None:
            return f"\n--- ERROR FETCHING: {self.path} ---"
        if not self.content:
            return f"\n--- EMPTY FILE: {self.path} ---"
        return (
            f"\n--- START OF FILE: {self.path} ---\n"
            f"{self.content[:max_chars]}\n"
            f"--- END OF FILE: {self.path} ---"
        )


@dataclass(frozen=True, slots=True)
class RepositoryContext:
    """Bounded text view of a repository, built once per analysis request."""

    structure_listing: str
    file_excerpts: str
    summary: str

    def as_prompt_text(self) -> str:
        """Directory listing followed by the file excerpts."""
        return f"{self.structure_listing}\n\n{self.file_excerpts}"

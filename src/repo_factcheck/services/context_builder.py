"""Repository context builder — the bounded view of a repository fed to the model.

Pipeline: metadata (default branch) → recursive tree → structure listing +
top-ranked files → concurrent blob fetch → assembled
:class:`RepositoryContext`.  Metadata and tree failures abort the build;
single-file failures become inline placeholders.
"""

from __future__ import annotations

import asyncio
import logging

from repo_factcheck.domain.entities import (
    EntryKind,
    ExcerptOutcome,
    RankedFile,
    RepositoryContext,
    TreeEntry,
)
from repo_factcheck.domain.ports.repo_fetcher import RepoFetcher
from repo_factcheck.domain.value_objects import RepositoryIdentifier
from repo_factcheck.services.file_ranker import select_top_files

logger = logging.getLogger(__name__)

DEFAULT_MAX_TREE_ENTRIES = 500
DEFAULT_MAX_FILES = 6
DEFAULT_MAX_FILE_CHARS = 8000


class RepositoryContextBuilder:
    """Builds one :class:`RepositoryContext` per call, with no caching.

    Parameters
    ----------
    fetcher:
        Adapter that can fetch metadata, tree and blobs from GitHub.
    max_tree_entries:
        Number of file paths kept in the structure listing.
    max_files:
        Number of top-ranked files whose content is fetched.
    max_file_chars:
        Per-file character cap applied to fetched content.
    """

    def __init__(
        self,
        fetcher: RepoFetcher,
        max_tree_entries: int = DEFAULT_MAX_TREE_ENTRIES,
        max_files: int = DEFAULT_MAX_FILES,
        max_file_chars: int = DEFAULT_MAX_FILE_CHARS,
    ) -> None:
        self._fetcher = fetcher
        self._max_tree_entries = max_tree_entries
        self._max_files = max_files
        self._max_file_chars = max_file_chars

    async def build(self, repo: RepositoryIdentifier) -> RepositoryContext:
        """Fetch and assemble the context for *repo*."""
        logger.info("Building repository context for %s", repo.full_name)

        metadata = await self._fetcher.fetch_metadata(repo)
        listing = await self._fetcher.fetch_tree(repo, metadata.default_branch)
        if listing.truncated:
            logger.warning(
                "File tree of %s was truncated by GitHub; continuing with %d entries",
                repo.full_name,
                len(listing.entries),
            )

        files = [e for e in listing.entries if e.kind is EntryKind.FILE]
        structure = self._render_structure(repo, files)

        selected = select_top_files(listing.entries, self._max_files)
        logger.info("Fetching %d key files from %s", len(selected), repo.full_name)
        outcomes = await self._fetch_all(selected)

        return RepositoryContext(
            structure_listing=structure,
            file_excerpts="\n".join(o.render(self._max_file_chars) for o in outcomes),
            summary=f"{len(files)} files found. Analyzed {len(outcomes)} key files deeply.",
        )

    def _render_structure(self, repo: RepositoryIdentifier, files: list[TreeEntry]) -> str:
        paths = [f.path for f in files[: self._max_tree_entries]]
        header = f"Directory Structure (Root: {repo.full_name}):"
        return "\n".join([header, *paths])

    # ── Scatter / gather ────────────────────────────────────────────────

    async def _fetch_all(self, selected: list[RankedFile]) -> list[ExcerptOutcome]:
        """Fetch every selected file concurrently; results keep rank order."""
        return list(await asyncio.gather(*(self._fetch_one(f) for f in selected)))

    async def _fetch_one(self, ranked: RankedFile) -> ExcerptOutcome:
        try:
            content = await self._fetcher.fetch_blob(ranked.content_ref)
        except Exception as exc:
            logger.warning("Failed to fetch %s: %s", ranked.path, exc)
            return ExcerptOutcome(path=ranked.path, error=str(exc))
        return ExcerptOutcome(path=ranked.path, content=content)

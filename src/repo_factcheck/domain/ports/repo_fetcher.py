"""Port: repository fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_factcheck.domain.entities import RepoMetadata, TreeListing
from repo_factcheck.domain.value_objects import RepositoryIdentifier


class RepoFetcher(Protocol):
    """Abstract contract for fetching GitHub repository data."""

    async def fetch_metadata(self, repo: RepositoryIdentifier) -> RepoMetadata:
        """Return high-level repository metadata (default branch)."""
        ...

    async def fetch_tree(self, repo: RepositoryIdentifier, branch: str) -> TreeListing:
        """Return the recursive file tree for the given branch."""
        ...

    async def fetch_blob(self, content_ref: str) -> str | None:
        """Return the decoded text of one blob, or ``None`` if it is empty."""
        ...

"""GitHub REST API adapter — implements the RepoFetcher port."""

from __future__ import annotations

import base64
import binascii
import logging

import httpx

from repo_factcheck.domain.entities import EntryKind, RepoMetadata, TreeEntry, TreeListing
from repo_factcheck.domain.exceptions import (
    ErrorKind,
    FileFetchError,
    GitHubRateLimitError,
    RepositoryFetchError,
    RepositoryNotFoundError,
    TreeFetchError,
)
from repo_factcheck.domain.value_objects import RepositoryIdentifier

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"

_RATE_LIMIT_MESSAGE = (
    "GitHub API rate limit exceeded. "
    "Supply a GitHub token (github_token or the GITHUB_TOKEN environment "
    "variable) to lift the limit."
)


class GitHubRestAdapter:
    """Concrete RepoFetcher backed by the GitHub v3 REST API."""

    def __init__(self, client: httpx.AsyncClient, token: str | None = None) -> None:
        self._client = client
        self._headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "repo-factcheck/1.0",
        }
        if token and token.strip():
            self._headers["Authorization"] = f"Bearer {token.strip()}"

    async def fetch_metadata(self, repo: RepositoryIdentifier) -> RepoMetadata:
        """GET /repos/{owner}/{repo} → RepoMetadata."""
        resp = await self._get(f"{_GITHUB_API}/repos/{repo.owner}/{repo.name}")

        if resp.status_code in (403, 429):
            raise GitHubRateLimitError(_RATE_LIMIT_MESSAGE)
        if resp.status_code == 404:
            raise RepositoryNotFoundError(
                f"Repository {repo.full_name} not found. "
                "Check the URL, or whether the repository is private."
            )
        if resp.status_code != 200:
            raise RepositoryFetchError(
                f"GitHub API error {resp.status_code} for {repo.full_name}: "
                f"{resp.reason_phrase}",
                _kind_for_status(resp.status_code),
            )

        try:
            default_branch = resp.json().get("default_branch") or "main"
        except (ValueError, AttributeError) as exc:
            raise RepositoryFetchError(
                f"Malformed repository metadata for {repo.full_name}.", ErrorKind.UNKNOWN
            ) from exc
        return RepoMetadata(owner=repo.owner, name=repo.name, default_branch=default_branch)

    async def fetch_tree(self, repo: RepositoryIdentifier, branch: str) -> TreeListing:
        """GET /repos/{owner}/{repo}/git/trees/{branch}?recursive=1 → TreeListing."""
        resp = await self._get(
            f"{_GITHUB_API}/repos/{repo.owner}/{repo.name}/git/trees/{branch}",
            params={"recursive": "1"},
        )

        if resp.status_code in (403, 429):
            raise GitHubRateLimitError(_RATE_LIMIT_MESSAGE)
        if resp.status_code != 200:
            raise TreeFetchError(
                f"Failed to fetch the file tree of {repo.full_name} "
                f"(HTTP {resp.status_code}).",
                _kind_for_status(resp.status_code),
            )

        try:
            data = resp.json()
            entries = [
                TreeEntry(
                    path=item["path"],
                    kind=EntryKind.DIRECTORY if item.get("type") == "tree" else EntryKind.FILE,
                    content_ref=item.get("url"),
                )
                for item in data.get("tree", [])
                if item.get("type") in ("blob", "tree")
            ]
            truncated = bool(data.get("truncated"))
        except (ValueError, KeyError, AttributeError) as exc:
            raise TreeFetchError(
                f"Malformed file tree response for {repo.full_name}.", ErrorKind.UNKNOWN
            ) from exc
        return TreeListing(entries=entries, truncated=truncated)

    async def fetch_blob(self, content_ref: str) -> str | None:
        """GET a blob URL and decode its base64 payload."""
        resp = await self._get(content_ref)
        if resp.status_code != 200:
            raise FileFetchError(
                f"HTTP {resp.status_code} fetching {content_ref}",
                _kind_for_status(resp.status_code),
            )

        try:
            encoded = resp.json().get("content")
        except (ValueError, AttributeError) as exc:
            raise FileFetchError(f"Malformed blob response at {content_ref}") from exc
        if not encoded:
            return None
        try:
            raw = base64.b64decode(encoded.replace("\n", ""))
        except (binascii.Error, ValueError) as exc:
            raise FileFetchError(f"Undecodable blob content at {content_ref}") from exc
        return raw.decode("utf-8", errors="replace")

    async def _get(
        self,
        url: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GET with transport-error translation."""
        try:
            return await self._client.get(url, headers=self._headers, params=params)
        except httpx.TimeoutException as exc:
            raise RepositoryFetchError(
                f"Timed out fetching {url}", ErrorKind.TIMEOUT
            ) from exc
        except httpx.HTTPError as exc:
            raise RepositoryFetchError(f"Network error fetching {url}: {exc}") from exc


def _kind_for_status(status_code: int) -> ErrorKind:
    if status_code == 429:
        return ErrorKind.RATE_LIMITED
    if status_code == 503:
        return ErrorKind.UNAVAILABLE
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    return ErrorKind.UNKNOWN

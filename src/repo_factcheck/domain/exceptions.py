"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Transport adapters raise :class:`RemoteCallError` subclasses tagged with an
:class:`ErrorKind`; the retry executor branches on that tag only.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure classes reported by remote calls."""

    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"
    QUOTA_EXHAUSTED = "quota_exhausted"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


RETRYABLE_KINDS: frozenset[ErrorKind] = frozenset(
    {ErrorKind.RATE_LIMITED, ErrorKind.UNAVAILABLE, ErrorKind.QUOTA_EXHAUSTED}
)


class FactCheckError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidGitHubUrlError(FactCheckError):
    """The supplied string does not contain a github.com/<owner>/<name> path."""


# ── Remote calls ────────────────────────────────────────────────────────────


class RemoteCallError(FactCheckError):
    """A remote call failed; ``kind`` says how."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.UNKNOWN) -> None:
        super().__init__(message)
        self.kind = kind

    @property
    def retryable(self) -> bool:
        return self.kind in RETRYABLE_KINDS


class RepositoryFetchError(RemoteCallError):
    """Repository host failure that fits no narrower class."""


class GitHubRateLimitError(RepositoryFetchError):
    """GitHub refused the call with 403 / 429."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.RATE_LIMITED)


class RepositoryNotFoundError(RepositoryFetchError):
    """The repository does not exist or is private (404)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.NOT_FOUND)


class TreeFetchError(RepositoryFetchError):
    """The recursive tree listing call returned a non-OK status."""


class FileFetchError(RepositoryFetchError):
    """A single blob could not be fetched. Never escapes the context builder."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmError(RemoteCallError):
    """The model call failed or produced no usable output."""


class ServiceOverloadedError(FactCheckError):
    """Retries were exhausted on a throttled / unavailable endpoint."""

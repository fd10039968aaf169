"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from repo_factcheck.domain.exceptions import InvalidGitHubUrlError

_GITHUB_PATH_RE = re.compile(r"github\.com/(?P<owner>[^/]+)/(?P<name>[^/]+)")


@dataclass(frozen=True, slots=True)
class RepositoryIdentifier:
    """Owner / name pair of a GitHub repository.

    Built from any string that contains ``github.com/<owner>/<name>``, e.g.
    ``https://github.com/acme/widget.git`` or
    ``github.com/acme/widget/tree/main/src``.  A trailing ``.git`` is
    stripped from the name.
    """

    owner: str
    name: str

    @classmethod
    def from_url(cls, url: str) -> RepositoryIdentifier:
        """Parse a raw URL string, raising :class:`InvalidGitHubUrlError`."""
        url = url.strip()
        match = _GITHUB_PATH_RE.search(url)
        if not match:
            raise InvalidGitHubUrlError(
                f"Invalid GitHub URL: '{url}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )
        owner = match["owner"]
        name = match["name"].removesuffix(".git")
        if not name:
            raise InvalidGitHubUrlError(f"Invalid GitHub URL: '{url}'. Repository name is empty.")
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

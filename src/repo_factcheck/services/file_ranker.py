"""File importance ranking — path heuristics only, no content inspection.

Scores are ordinal bands; the first matching band wins.  Configuration files
sit above generic source because claimed-but-unused integrations usually
show up as config without any calling code.
"""

from __future__ import annotations

from typing import Iterable

from repo_factcheck.domain.entities import RankedFile, TreeEntry

# ── Bands ───────────────────────────────────────────────────────────────────

README_SCORE = 100
MANIFEST_SCORE = 90
CONTAINER_SCORE = 85
CONFIG_SCORE = 80
SERVICE_LAYER_SCORE = 70
SOURCE_SCORE = 50
TEST_SCORE = 20
DEFAULT_SCORE = 10
SKIP_SCORE = 0

_MANIFEST_NAMES: tuple[str, ...] = (
    "package.json",
    "pom.xml",
    "requirements.txt",
    "build.gradle",
    "pyproject.toml",
    "setup.py",
    "go.mod",
    "cargo.toml",
    "gemfile",
    "composer.json",
)

_CONTAINER_MARKERS: tuple[str, ...] = ("docker", "k8s", "kubernetes", "helm")

_CONFIG_MARKERS: tuple[str, ...] = (
    "config",
    "settings",
    "application.y",  # application.yml / application.yaml
    ".env",
)

_SERVICE_MARKERS: tuple[str, ...] = ("controller", "service", "api")

_SOURCE_EXTENSIONS: tuple[str, ...] = (
    ".ts", ".tsx", ".js", ".jsx", ".java", ".kt", ".py", ".go", ".rs", ".rb", ".cs",
)

_TEST_MARKERS: tuple[str, ...] = ("test", "spec")

_SKIP_EXTENSIONS: tuple[str, ...] = (
    ".lock",
    ".png", ".jpg", ".jpeg", ".gif", ".ico", ".svg", ".webp",
    ".pdf", ".zip", ".jar", ".woff", ".woff2", ".ttf",
)


def score_path(path: str) -> int:
    """Return the importance band of *path* (case-insensitive)."""
    lower = path.lower()

    # Lock files and binaries are never worth fetching, whatever their name.
    if lower.endswith(_SKIP_EXTENSIONS):
        return SKIP_SCORE
    if "readme.md" in lower:
        return README_SCORE
    if any(name in lower for name in _MANIFEST_NAMES):
        return MANIFEST_SCORE
    if any(marker in lower for marker in _CONTAINER_MARKERS):
        return CONTAINER_SCORE
    if any(marker in lower for marker in _CONFIG_MARKERS):
        return CONFIG_SCORE
    if any(marker in lower for marker in _SERVICE_MARKERS):
        return SERVICE_LAYER_SCORE
    if lower.endswith(_SOURCE_EXTENSIONS):
        return SOURCE_SCORE
    if any(marker in lower for marker in _TEST_MARKERS):
        return TEST_SCORE
    return DEFAULT_SCORE


def rank_files(entries: Iterable[TreeEntry]) -> list[RankedFile]:
    """Score fetchable entries and sort them by descending score.

    ``sorted`` is stable, so equal scores keep their tree order.
    """
    ranked = [
        RankedFile(path=entry.path, content_ref=entry.content_ref, score=score_path(entry.path))
        for entry in entries
        if entry.is_fetchable and entry.content_ref
    ]
    return sorted(ranked, key=lambda f: f.score, reverse=True)


def select_top_files(entries: Iterable[TreeEntry], limit: int) -> list[RankedFile]:
    """Return the *limit* highest-ranked fetchable entries."""
    return rank_files(entries)[:limit]

"""Analyze-candidate use case — repository context in, fact-check report out.

Depends only on the ports and the pure services; the interface layer
injects the concrete adapters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from repo_factcheck.domain.entities import RepositoryContext
from repo_factcheck.domain.ports.repo_fetcher import RepoFetcher
from repo_factcheck.domain.reports import AnalysisReport
from repo_factcheck.domain.value_objects import RepositoryIdentifier
from repo_factcheck.services.context_builder import (
    DEFAULT_MAX_FILE_CHARS,
    DEFAULT_MAX_FILES,
    DEFAULT_MAX_TREE_ENTRIES,
    RepositoryContextBuilder,
)
from repo_factcheck.services.fact_check import FactCheckService

logger = logging.getLogger(__name__)

FetcherFactory = Callable[[str | None], RepoFetcher]


@dataclass(frozen=True, slots=True)
class CandidateAnalysis:
    report: AnalysisReport
    repository_summary: str


class AnalyzeCandidateUseCase:
    """Locator → context builder → fact-check model call.

    Parameters
    ----------
    fetcher_factory:
        Builds a :class:`RepoFetcher` for an optional per-request token.
    fact_checker:
        Service wrapping the model calls.
    """

    def __init__(
        self,
        fetcher_factory: FetcherFactory,
        fact_checker: FactCheckService,
        max_tree_entries: int = DEFAULT_MAX_TREE_ENTRIES,
        max_files: int = DEFAULT_MAX_FILES,
        max_file_chars: int = DEFAULT_MAX_FILE_CHARS,
    ) -> None:
        self._fetcher_factory = fetcher_factory
        self._fact_checker = fact_checker
        self._max_tree_entries = max_tree_entries
        self._max_files = max_files
        self._max_file_chars = max_file_chars

    async def execute(
        self,
        github_url: str,
        job_description: str,
        resume_text: str,
        github_token: str | None = None,
        code_snippet: str = "",
    ) -> CandidateAnalysis:
        repo = RepositoryIdentifier.from_url(github_url)
        logger.info("Analyzing candidate against %s", repo.full_name)

        builder = RepositoryContextBuilder(
            self._fetcher_factory(github_token),
            max_tree_entries=self._max_tree_entries,
            max_files=self._max_files,
            max_file_chars=self._max_file_chars,
        )
        context = await builder.build(repo)

        report = await self._fact_checker.analyze(
            job_description, resume_text, _code_context(context, code_snippet)
        )
        return CandidateAnalysis(report=report, repository_summary=context.summary)


def _code_context(context: RepositoryContext, code_snippet: str) -> str:
    text = context.as_prompt_text()
    if code_snippet.strip():
        text += f"\n\n--- PASTED CODE SNIPPET ---\n{code_snippet.strip()}"
    return text

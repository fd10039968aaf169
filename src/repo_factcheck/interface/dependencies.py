"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from repo_factcheck.infrastructure.config import get_settings
from repo_factcheck.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_factcheck.infrastructure.openai_adapter import OpenAIAdapter
from repo_factcheck.services.analyze_candidate import AnalyzeCandidateUseCase
from repo_factcheck.services.fact_check import FactCheckService

_http_client: httpx.AsyncClient | None = None
_openai_adapter: OpenAIAdapter | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _openai_adapter  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout_s))
    _openai_adapter = OpenAIAdapter(
        api_key=settings.openai_api_key.get_secret_value(),
        model=settings.openai_model,
        timeout_s=settings.request_timeout_s,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _openai_adapter  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    if _openai_adapter:
        await _openai_adapter.close()
        _openai_adapter = None


def get_fact_check_service() -> FactCheckService:
    """Build the model-facing service around the shared OpenAI adapter."""
    settings = get_settings()
    assert _openai_adapter is not None, "startup() was not called"

    return FactCheckService(
        llm_gateway=_openai_adapter,
        max_attempts=settings.retry_max_attempts,
        base_delay=settings.retry_base_delay_s,
        max_context_tokens=settings.max_context_tokens,
    )


def get_use_case() -> AnalyzeCandidateUseCase:
    """Build the analysis use case with injected adapters."""
    settings = get_settings()
    assert _http_client is not None, "startup() was not called"
    client = _http_client

    configured = settings.github_token.get_secret_value() if settings.github_token else None

    def _fetcher(token: str | None) -> GitHubRestAdapter:
        return GitHubRestAdapter(client=client, token=token or configured)

    return AnalyzeCandidateUseCase(
        fetcher_factory=_fetcher,
        fact_checker=get_fact_check_service(),
        max_tree_entries=settings.max_tree_entries,
        max_files=settings.max_files_to_fetch,
        max_file_chars=settings.max_file_chars,
    )

"""API routes — thin controllers that delegate to the services."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from repo_factcheck.domain.reports import InterviewFeedback
from repo_factcheck.interface.dependencies import get_fact_check_service, get_use_case
from repo_factcheck.interface.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    InterviewReplyResponse,
    InterviewRequest,
)
from repo_factcheck.services.analyze_candidate import AnalyzeCandidateUseCase
from repo_factcheck.services.fact_check import FactCheckService, is_interview_closed

router = APIRouter()

_LLM_ERRORS: dict[int | str, dict[str, object]] = {
    502: {"model": ErrorResponse, "description": "LLM provider error"},
    503: {"model": ErrorResponse, "description": "LLM provider overloaded after retries"},
}


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid GitHub URL or request body"},
        404: {"model": ErrorResponse, "description": "Repository not found or private"},
        429: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
        502: {"model": ErrorResponse, "description": "GitHub or LLM provider error"},
        503: {"model": ErrorResponse, "description": "LLM provider overloaded after retries"},
    },
)
async def analyze(
    body: AnalyzeRequest,
    use_case: AnalyzeCandidateUseCase = Depends(get_use_case),
) -> AnalyzeResponse:
    """Fact-check a resume against a GitHub repository and a job description."""
    result = await use_case.execute(
        body.github_url,
        body.job_description,
        body.resume_text,
        github_token=body.github_token,
        code_snippet=body.code_snippet,
    )
    return AnalyzeResponse(report=result.report, repository_summary=result.repository_summary)


@router.post(
    "/interview/reply", response_model=InterviewReplyResponse, responses=_LLM_ERRORS
)
async def interview_reply(
    body: InterviewRequest,
    service: FactCheckService = Depends(get_fact_check_service),
) -> InterviewReplyResponse:
    """Return the interviewer's next turn for one analysed claim."""
    reply = await service.interview_reply(body.history, body.item)
    return InterviewReplyResponse(reply=reply, finished=is_interview_closed(reply))


@router.post(
    "/interview/feedback", response_model=InterviewFeedback, responses=_LLM_ERRORS
)
async def interview_feedback(
    body: InterviewRequest,
    service: FactCheckService = Depends(get_fact_check_service),
) -> InterviewFeedback:
    """Score a finished interview transcript."""
    return await service.interview_feedback(body.history, body.item)

"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from repo_factcheck.domain.reports import AnalysisItem, AnalysisReport, ChatMessage


class AnalyzeRequest(BaseModel):
    """Request body for ``POST /analyze``."""

    github_url: str
    job_description: str = Field(min_length=1)
    resume_text: str = Field(min_length=1)
    github_token: str | None = None
    code_snippet: str = ""

    @field_validator("github_url")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "github_url must not be empty."
            raise ValueError(msg)
        return stripped


class AnalyzeResponse(BaseModel):
    """Successful response from ``POST /analyze``."""

    report: AnalysisReport
    repository_summary: str


class InterviewRequest(BaseModel):
    """Body shared by the interview endpoints; the client holds the history."""

    item: AnalysisItem
    history: list[ChatMessage] = Field(default_factory=list)


class InterviewReplyResponse(BaseModel):
    reply: str
    finished: bool


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str

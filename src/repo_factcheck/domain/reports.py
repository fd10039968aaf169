"""Report models produced by the language model.

These double as the JSON schemas handed to the model for structured output,
so field descriptions are part of the prompt.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class Verdict(str, Enum):
    """Classification of one resume claim against the code."""

    VERIFIED = "VERIFIED"
    EXAGGERATED = "EXAGGERATED"
    MISSING = "MISSING"
    UNCERTAIN = "UNCERTAIN"


TRUST_DEDUCTIONS: dict[Verdict, int] = {
    Verdict.MISSING: 20,
    Verdict.EXAGGERATED: 10,
    Verdict.UNCERTAIN: 5,
    Verdict.VERIFIED: 0,
}


class AnalysisItem(BaseModel):
    topic: str = Field(description="The specific technical topic (e.g. Redis, TDD).")
    resume_claim: str = Field(description="What the candidate claimed in the resume.")
    code_observation: str = Field(
        description="What was actually found (or missing) in the code."
    )
    question_basis: str = Field(
        description=(
            "Structured text strictly following this format: "
            "'[JD requirement]: ... [Code status]: ... [Interviewer intent]: ...'"
        )
    )
    verdict: Verdict
    interview_question: str = Field(description="A sharp, pressure interview question.")
    score: float = Field(description="Confidence of the mismatch (0-100).")


class AnalysisReport(BaseModel):
    items: list[AnalysisItem] = Field(
        description=(
            "Claims found in the resume that need to be fact-checked "
            "against the code and the job description."
        )
    )
    summary: str = Field(description="Overall summary of the analysis.")
    overall_trust_score: float = Field(
        description="Trust score calculated from the deduction rubric."
    )


class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    text: str


class InterviewFeedback(BaseModel):
    defense_score: float = Field(description="Total score out of 100.")

    logic_score: float = Field(description="Score out of 40.")
    logic_reasoning: str = Field(description="Reason for points awarded.")
    logic_improvement: str = Field(
        description="Reason for points deducted. Mandatory if score < 40."
    )

    honesty_score: float = Field(description="Score out of 30.")
    honesty_reasoning: str
    honesty_improvement: str = Field(description="Mandatory if score < 30.")

    solution_score: float = Field(description="Score out of 30.")
    solution_reasoning: str
    solution_improvement: str = Field(description="Mandatory if score < 30.")

    feedback_summary: str = Field(description="One-line summary of the performance.")
    positive_feedback: list[str] = Field(description="Three specific strengths.")
    constructive_feedback: list[str] = Field(
        description="Three specific areas for improvement."
    )
    action_items: list[str] = Field(
        description="Three concrete next steps for the candidate."
    )


def expected_trust_score(items: list[AnalysisItem]) -> int:
    """Apply the fixed deduction rubric: start at 100, floor at 0."""
    deductions = sum(TRUST_DEDUCTIONS[item.verdict] for item in items)
    return max(0, 100 - deductions)

"""Fact-check, interview and feedback calls against the language model."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from repo_factcheck.domain.exceptions import LlmError
from repo_factcheck.domain.ports.llm_gateway import LlmGateway
from repo_factcheck.domain.reports import (
    AnalysisItem,
    AnalysisReport,
    ChatMessage,
    InterviewFeedback,
    expected_trust_score,
)
from repo_factcheck.services import prompts
from repo_factcheck.services.retry import (
    DEFAULT_BASE_DELAY_S,
    DEFAULT_MAX_ATTEMPTS,
    call_with_retry,
)
from repo_factcheck.services.token_budget import count_tokens, truncate_to_budget

logger = logging.getLogger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

ANALYSIS_TEMPERATURE = 0.4
FEEDBACK_TEMPERATURE = 0.5


class FactCheckService:
    """Drives the three model interactions, each behind the retry executor.

    Parameters
    ----------
    llm_gateway:
        Adapter that can send prompts to an LLM.
    max_attempts, base_delay:
        Retry policy for every generation call.
    max_context_tokens:
        Token ceiling for the code context in the analysis prompt, or
        ``None`` to send it uncapped.
    """

    def __init__(
        self,
        llm_gateway: LlmGateway,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY_S,
        max_context_tokens: int | None = None,
    ) -> None:
        self._llm = llm_gateway
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._max_context_tokens = max_context_tokens

    async def analyze(
        self, job_description: str, resume_text: str, code_context: str
    ) -> AnalysisReport:
        """Cross-check resume claims against the code context and the JD."""
        if self._max_context_tokens is not None:
            logger.info("Code context: %d tokens", count_tokens(code_context))
            code_context = truncate_to_budget(code_context, self._max_context_tokens)

        user_prompt = prompts.ANALYSIS_USER_TEMPLATE.format(
            job_description=job_description,
            resume_text=resume_text,
            code_context=code_context,
        )

        async def _call() -> AnalysisReport:
            raw = await self._llm.complete(
                prompts.ANALYSIS_SYSTEM_PROMPT,
                [ChatMessage(role="user", text=user_prompt)],
                json_schema=AnalysisReport.model_json_schema(),
                schema_name="analysis_report",
                temperature=ANALYSIS_TEMPERATURE,
            )
            return parse_model_output(raw, AnalysisReport)

        report = await self._retry(_call)
        expected = expected_trust_score(report.items)
        if report.overall_trust_score != expected:
            logger.warning(
                "Model trust score %s disagrees with rubric score %d",
                report.overall_trust_score,
                expected,
            )
        return report

    async def interview_reply(
        self, history: Sequence[ChatMessage], item: AnalysisItem
    ) -> str:
        """Return the interviewer's next turn for the claim in *item*."""
        system_prompt = prompts.INTERVIEW_SYSTEM_TEMPLATE.format(
            resume_claim=item.resume_claim,
            topic=item.topic,
            code_observation=item.code_observation,
            verdict=item.verdict.value,
            closing_phrase=prompts.INTERVIEW_CLOSING_PHRASE,
        )

        async def _call() -> str:
            reply = await self._llm.complete(system_prompt, list(history))
            if not reply.strip():
                raise LlmError("Interviewer returned an empty reply.")
            return reply.strip()

        return await self._retry(_call)

    async def interview_feedback(
        self, history: Sequence[ChatMessage], item: AnalysisItem
    ) -> InterviewFeedback:
        """Score the finished interview transcript."""
        conversation = "\n".join(f"{m.role}: {m.text}" for m in history)
        user_prompt = prompts.FEEDBACK_USER_TEMPLATE.format(
            topic=item.topic,
            verdict=item.verdict.value,
            conversation=conversation,
        )

        async def _call() -> InterviewFeedback:
            raw = await self._llm.complete(
                prompts.FEEDBACK_SYSTEM_PROMPT,
                [ChatMessage(role="user", text=user_prompt)],
                json_schema=InterviewFeedback.model_json_schema(),
                schema_name="interview_feedback",
                temperature=FEEDBACK_TEMPERATURE,
            )
            return parse_model_output(raw, InterviewFeedback)

        return await self._retry(_call)

    async def _retry(self, operation: Callable[[], Awaitable[T]]) -> T:
        return await call_with_retry(
            operation, max_attempts=self._max_attempts, base_delay=self._base_delay
        )


def is_interview_closed(reply: str) -> bool:
    """True once the interviewer has said the closing phrase."""
    return prompts.INTERVIEW_CLOSING_PHRASE in reply


def parse_model_output(raw: str, model: type[ModelT]) -> ModelT:
    """Validate a JSON completion against *model*.

    Tolerates a surrounding markdown code fence.
    """
    text = raw.strip()
    if text.startswith("```"):
        first_nl = text.index("\n") if "\n" in text else 3
        text = text[first_nl + 1 :]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()

    if not text:
        raise LlmError(f"LLM returned no {model.__name__} content.")
    try:
        return model.model_validate_json(text)
    except ValidationError as exc:
        raise LlmError(f"LLM returned an invalid {model.__name__}: {exc}") from exc

"""OpenAI adapter — implements the LlmGateway port."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx
from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    AuthenticationError,
    RateLimitError,
)

from repo_factcheck.domain.exceptions import ErrorKind, LlmError
from repo_factcheck.domain.reports import ChatMessage

logger = logging.getLogger(__name__)

_ROLE_MAP = {"user": "user", "model": "assistant"}


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by the OpenAI chat-completions API.

    The SDK's own retries are disabled; retrying is left to
    :func:`repo_factcheck.services.retry.call_with_retry`.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout_s: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = AsyncOpenAI(
            api_key=api_key,
            max_retries=0,
            timeout=timeout_s,
            http_client=http_client,
        )
        self._model = model

    async def complete(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
        *,
        json_schema: dict[str, Any] | None = None,
        schema_name: str = "response",
        temperature: float | None = None,
    ) -> str:
        """Send a system prompt + conversation and return the completion text."""
        kwargs: dict[str, object] = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                *(
                    {"role": _ROLE_MAP[m.role], "content": m.text}
                    for m in messages
                ),
            ],
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        if json_schema is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": json_schema},
            }

        try:
            response = await self._client.chat.completions.create(**kwargs)  # type: ignore[arg-type]

        except AuthenticationError as exc:
            raise LlmError(
                "Invalid OpenAI API key. "
                "Set a valid key in the OPENAI_API_KEY environment variable."
            ) from exc

        except RateLimitError as exc:
            kind = (
                ErrorKind.QUOTA_EXHAUSTED
                if exc.code == "insufficient_quota"
                else ErrorKind.RATE_LIMITED
            )
            logger.warning("OpenAI rate limit (%s): %s", kind.value, exc)
            raise LlmError(f"OpenAI rate limit / quota error: {exc}", kind) from exc

        except APIStatusError as exc:
            kind = ErrorKind.UNAVAILABLE if exc.status_code == 503 else ErrorKind.UNKNOWN
            raise LlmError(
                f"OpenAI returned HTTP {exc.status_code}: {exc.message}", kind
            ) from exc

        except APITimeoutError as exc:
            raise LlmError("OpenAI request timed out.", ErrorKind.TIMEOUT) from exc

        except APIConnectionError as exc:
            raise LlmError(f"Could not reach OpenAI: {exc}") from exc

        if not response.choices:
            raise LlmError("LLM returned no choices.")
        content = response.choices[0].message.content
        if not content:
            raise LlmError("LLM returned an empty response.")
        return content

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()

"""Port: LLM gateway — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from repo_factcheck.domain.reports import ChatMessage


class LlmGateway(Protocol):
    """Abstract contract for interacting with a large-language model."""

    async def complete(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
        *,
        json_schema: dict[str, Any] | None = None,
        schema_name: str = "response",
        temperature: float | None = None,
    ) -> str:
        """Send a system prompt plus conversation turns and return the raw text.

        When *json_schema* is given the model is asked for a JSON document
        conforming to it.
        """
        ...

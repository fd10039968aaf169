"""Token counting and capping for prompt content.

Uses ``tiktoken`` for exact counts so the code context never pushes the
fact-check prompt past the configured ceiling.
"""

from __future__ import annotations

import tiktoken

_ENCODING_NAME = "o200k_base"  # GPT-4o family

_TRUNCATION_NOTICE = "\n[… truncated to fit token budget]"

_encoder: tiktoken.Encoding | None = None


def _get_encoder() -> tiktoken.Encoding:
    global _encoder  # noqa: PLW0603
    if _encoder is None:
        _encoder = tiktoken.get_encoding(_ENCODING_NAME)
    return _encoder


def count_tokens(text: str) -> int:
    """Return the exact token count for *text*."""
    return len(_get_encoder().encode(text))


def truncate_to_budget(text: str, max_tokens: int) -> str:
    """Cap *text* at *max_tokens*, cutting back to a line boundary when possible."""
    tokens = _get_encoder().encode(text)
    if len(tokens) <= max_tokens:
        return text

    truncated = _get_encoder().decode(tokens[:max_tokens])
    last_nl = truncated.rfind("\n")
    if last_nl > len(truncated) // 2:
        truncated = truncated[: last_nl + 1]
    return truncated + _TRUNCATION_NOTICE

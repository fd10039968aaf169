"""Bounded exponential-backoff retry for remote calls."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from repo_factcheck.domain.exceptions import RemoteCallError, ServiceOverloadedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

OVERLOADED_MESSAGE = (
    "The AI service is receiving too many requests right now. "
    "Please try again in about a minute."
)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY_S = 2.0


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY_S,
    *,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> T:
    """Await ``operation()`` up to *max_attempts* times.

    Only :class:`RemoteCallError` instances whose ``kind`` is retryable
    (rate limited, unavailable, quota exhausted) are retried, after a delay
    of ``base_delay * 2**attempt`` seconds.  Anything else is re-raised
    untouched on first occurrence.  When every attempt fails with a
    retryable error, :class:`ServiceOverloadedError` is raised instead of
    the transport error.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error: RemoteCallError | None = None
    for attempt in range(max_attempts):
        try:
            return await operation()
        except RemoteCallError as exc:
            if not exc.retryable:
                raise
            last_error = exc

        if attempt < max_attempts - 1:
            delay = base_delay * 2**attempt
            logger.warning(
                "Transient failure (%s). Retrying in %.1fs (attempt %d/%d)",
                last_error.kind.value,
                delay,
                attempt + 1,
                max_attempts,
            )
            await sleep(delay)

    logger.error("Giving up after %d attempts: %s", max_attempts, last_error)
    raise ServiceOverloadedError(OVERLOADED_MESSAGE) from last_error

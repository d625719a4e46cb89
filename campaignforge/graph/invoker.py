"""
invoker.py
----------
Bounded-retry invocation of the external generation service.

`RetryableInvoker` wraps any async callable (in production, a LangChain chat
model's `ainvoke`) with a `RetryPolicy`: a fixed number of attempts and the
delay to wait before each retry. Any exception, or an empty reply, counts as
a failed attempt. Once the policy is exhausted a `GenerationUnavailable`
carrying the last underlying error is raised; there is never an unbounded
retry loop.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Tuple

from ..errors import EmptyGeneration, GenerationUnavailable

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 1
    backoff_schedule: Tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if len(self.backoff_schedule) != self.max_attempts - 1:
            raise ValueError("backoff_schedule must have max_attempts - 1 entries")
        if any(delay < 0 for delay in self.backoff_schedule):
            raise ValueError("backoff delays must be non-negative")

    @classmethod
    def linear(cls, max_attempts: int, step_seconds: float) -> "RetryPolicy":
        """`step_seconds * attempt` before each retry: 2s, 4s, ... for step 2."""
        schedule = tuple(step_seconds * attempt for attempt in range(1, max_attempts))
        return cls(max_attempts=max_attempts, backoff_schedule=schedule)

    @property
    def total_backoff(self) -> float:
        return sum(self.backoff_schedule)


def response_text(result: Any) -> str:
    """Normalize a chat model result (AIMessage, str, content parts) to text."""
    content = getattr(result, "content", result)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return "" if content is None else str(content)


class RetryableInvoker:
    def __init__(
        self,
        call: Callable[[Any], Awaitable[Any]],
        policy: RetryPolicy,
        name: str = "generation",
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._call = call
        self.policy = policy
        self.name = name
        self._sleep = sleep

    async def invoke(self, payload: Any) -> str:
        last_error: BaseException | None = None
        attempts = self.policy.max_attempts

        for attempt in range(1, attempts + 1):
            logger.info("%s attempt %d/%d", self.name, attempt, attempts)
            started = time.monotonic()
            try:
                text = response_text(await self._call(payload))
                if not text.strip():
                    raise EmptyGeneration()
                logger.info(
                    "%s call completed in %.2fs (%d chars)",
                    self.name, time.monotonic() - started, len(text),
                )
                return text
            except Exception as e:
                last_error = e
                logger.warning("%s attempt %d failed: %r", self.name, attempt, e)

            if attempt < attempts:
                delay = self.policy.backoff_schedule[attempt - 1]
                logger.info("Retrying %s in %.1fs", self.name, delay)
                await self._sleep(delay)

        raise GenerationUnavailable(last_error, attempts)

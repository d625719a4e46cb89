"""Shared test fixtures for pytest.

Env defaults are set before any `campaignforge` import so the module-level
settings never pick up a real API key or write into the working tree.
"""

import os
import tempfile
from typing import Any, List

import pytest

os.environ.setdefault("DEV_NO_LLM", "1")
os.environ.setdefault("ANALYSES_DIR", tempfile.mkdtemp(prefix="campaignforge-analyses-"))
os.environ.setdefault("CONTEXT_SWEEP_PROBABILITY", "0")

from langchain_core.messages import AIMessage

from campaignforge.graph.invoker import RetryableInvoker, RetryPolicy


class StubModel:
    """Stand-in for a chat model: replays scripted replies or exceptions."""

    def __init__(self, *replies: Any) -> None:
        self.replies = list(replies)
        self.calls: List[Any] = []

    async def ainvoke(self, messages: Any) -> AIMessage:
        self.calls.append(messages)
        reply = self.replies[min(len(self.calls), len(self.replies)) - 1]
        if isinstance(reply, BaseException):
            raise reply
        return AIMessage(content=reply)


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_invoker(recording_sleep: RecordingSleep):
    def _make(model: StubModel, policy: RetryPolicy = RetryPolicy.linear(2, 2.0)) -> RetryableInvoker:
        return RetryableInvoker(model.ainvoke, policy, name="test", sleep=recording_sleep)

    return _make

"""
nodes.py
--------
Model-facing steps for the generation pipeline.

This module defines:
- Construction of the two chat models (campaign generation and conversation)
  and their retry-wrapped invokers
- The generation step (build campaign prompt, invoke with retries)
- The conversation step (single invocation, plain-text reply)

Key design notes:
- ChatOpenAI's own retries are disabled (`max_retries=0`); `RetryableInvoker`
  owns the retry policy.
- Optional offline/dev mode (`DEV_NO_LLM=true`) or a missing API key replaces
  the model call with one that always fails, so requests are answered with
  fallback content.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI

from ..config import Settings
from ..models import GenerationRequest, Subject
from .invoker import RetryableInvoker, RetryPolicy
from .prompts import build_generation_messages


class GenerationServiceNotConfigured(RuntimeError):
    pass


async def _offline_call(messages: List[BaseMessage]) -> Any:
    raise GenerationServiceNotConfigured("Generation service disabled (DEV_NO_LLM or missing OPENAI_API_KEY)")


# --------------------------------------------------------------------------------------
# Model & invoker construction
# --------------------------------------------------------------------------------------
def make_campaign_model(settings: Settings) -> ChatOpenAI:
    return ChatOpenAI(
        model=settings.campaign_model,
        api_key=settings.openai_api_key,
        max_tokens=settings.campaign_max_tokens,
        max_retries=0,
    )


def make_chat_model(settings: Settings) -> ChatOpenAI:
    return ChatOpenAI(
        model=settings.chat_model,
        api_key=settings.openai_api_key,
        max_tokens=settings.chat_max_tokens,
        temperature=settings.chat_temperature,
        presence_penalty=0.1,
        frequency_penalty=0.1,
        max_retries=0,
    )


def build_campaign_invoker(settings: Settings) -> RetryableInvoker:
    call = make_campaign_model(settings).ainvoke if settings.llm_enabled else _offline_call
    policy = RetryPolicy.linear(settings.generation_max_attempts, settings.generation_backoff_seconds)
    return RetryableInvoker(call, policy, name="campaign generation")


def build_chat_invoker(settings: Settings) -> RetryableInvoker:
    call = make_chat_model(settings).ainvoke if settings.llm_enabled else _offline_call
    return RetryableInvoker(call, RetryPolicy(max_attempts=1), name="conversation")


# --------------------------------------------------------------------------------------
# Steps
# --------------------------------------------------------------------------------------
async def generation_step(
    invoker: RetryableInvoker,
    request: GenerationRequest,
    subject: Subject,
    record: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Produce the raw campaign text for one request.

    Raises `GenerationUnavailable` once the invoker's retry policy is exhausted.
    """
    return await invoker.invoke(build_generation_messages(request, subject, record))


async def conversation_step(invoker: RetryableInvoker, messages: List[BaseMessage]) -> str:
    return await invoker.invoke(messages)

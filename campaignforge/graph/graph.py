"""
graph.py
--------
LangGraph wiring for artifact generation, plus the conversation turn handler.

Flow:
START -> lookup -> generate -> extract -> repair -> END
                      |           |
                      +-----------+--> fallback -> END

`run_generation` is the boundary for the artifact flow: whatever happens
inside the graph, it returns a complete, schema-conformant artifact, with
`success=False` whenever fallback content was served.

`continue_conversation` handles one chat turn against the context cache:
a new or evicted conversation key gets a freshly built system context
(Uninitialized -> Initialized); an initialized key reuses the cached context
with the most recent history turns.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from langgraph.graph import END, START, StateGraph

from ..errors import ExtractionFailed, GenerationUnavailable
from ..models import (
    ConversationOutcome,
    ConverseRequest,
    GenerationOutcome,
    GenerationRequest,
    GenerationState,
    Subject,
)
from .extraction import ResponseExtractor
from .fallback import synthesize, synthesize_for_request
from .invoker import RetryableInvoker
from .lookup import AnalysisLookup, safe_lookup
from .memory import ContextCache
from .nodes import conversation_step, generation_step
from .prompts import build_conversation_messages, build_system_context
from .repair import repair
from .schema import ARTIFACT_SCHEMA
from .subject import DEFAULT_CATEGORY, DEFAULT_NAME, conversation_key, resolve_subject

logger = logging.getLogger(__name__)

HISTORY_WINDOW = 10
RAW_LOG_CHARS = 1000


# --------------------------------------------------------------------------------------
# Helpers
# --------------------------------------------------------------------------------------
def _result_to_dict(result: Any) -> Dict[str, Any]:
    """
    Normalize a LangGraph invoke result (a pydantic model or a dict of
    channel values, depending on version) into a plain dict.
    """
    if result is None:
        return {}
    if hasattr(result, "model_dump"):
        # Keep nested models as objects; model_dump() would flatten them to dicts.
        return {name: getattr(result, name) for name in type(result).model_fields}
    return dict(result)


def _subject_of(state: GenerationState) -> Subject:
    return state.subject or resolve_subject(state.record, state.request.subject_name)


# --------------------------------------------------------------------------------------
# Graph build
# --------------------------------------------------------------------------------------
def build_graph(invoker: RetryableInvoker, lookup: AnalysisLookup, extractor: ResponseExtractor | None = None):
    """Build and compile the generation state machine."""
    extractor = extractor or ResponseExtractor(require_object=True)

    async def node_lookup(state: GenerationState) -> Dict[str, Any]:
        request = state.request
        record = request.subject_context
        if record is None:
            record = await asyncio.to_thread(safe_lookup, lookup, request.subject_name)
        subject = resolve_subject(record, request.subject_name)
        logger.info("Generating %s campaign for %r (%s)", request.mode, subject.name, subject.category)
        return {"record": record, "subject": subject}

    async def node_generate(state: GenerationState) -> Dict[str, Any]:
        try:
            text = await generation_step(invoker, state.request, _subject_of(state), state.record)
        except GenerationUnavailable as e:
            logger.error("Generation failed: %s", e)
            return {"error": e.message}
        return {"raw_text": text}

    def node_extract(state: GenerationState) -> Dict[str, Any]:
        try:
            parsed = extractor.extract(state.raw_text or "")
        except ExtractionFailed as e:
            logger.error("%s; response head: %s", e, (state.raw_text or "")[:RAW_LOG_CHARS])
            return {"error": e.message}
        return {"parsed": parsed}

    def node_repair(state: GenerationState) -> Dict[str, Any]:
        subject = _subject_of(state)
        guided = state.request.guided_inputs
        artifact = repair(state.parsed, ARTIFACT_SCHEMA, lambda: synthesize(subject, guided))
        return {"artifact": artifact, "success": True}

    def node_fallback(state: GenerationState) -> Dict[str, Any]:
        subject = _subject_of(state)
        logger.warning("Serving fallback campaign for %r", subject.name)
        return {
            "artifact": synthesize(subject, state.request.guided_inputs),
            "success": False,
            "error": state.error or "Campaign generation failed",
        }

    def route_after_generate(state: GenerationState) -> str:
        return "fallback" if state.error else "extract"

    def route_after_extract(state: GenerationState) -> str:
        return "fallback" if state.parsed is None else "repair"

    g = StateGraph(GenerationState)

    g.add_node("lookup", node_lookup)
    g.add_node("generate", node_generate)
    g.add_node("extract", node_extract)
    g.add_node("repair", node_repair)
    g.add_node("fallback", node_fallback)

    g.add_edge(START, "lookup")
    g.add_edge("lookup", "generate")
    g.add_conditional_edges("generate", route_after_generate, {"extract": "extract", "fallback": "fallback"})
    g.add_conditional_edges("extract", route_after_extract, {"repair": "repair", "fallback": "fallback"})
    g.add_edge("repair", END)
    g.add_edge("fallback", END)

    return g.compile()


# --------------------------------------------------------------------------------------
# Entry points
# --------------------------------------------------------------------------------------
async def run_generation(app_graph, request: GenerationRequest) -> GenerationOutcome:
    """
    Run one artifact generation. Never raises: any unexpected error is
    logged and turned into a fallback outcome.
    """
    try:
        raw = await app_graph.ainvoke(GenerationState(request=request))
        state = _result_to_dict(raw)
        artifact = state.get("artifact")
        subject = state.get("subject")
        if not isinstance(artifact, dict) or subject is None:
            raise RuntimeError("Generation graph finished without an artifact")
        return GenerationOutcome(
            artifact=artifact,
            subject=subject,
            success=bool(state.get("success")),
            error=state.get("error"),
        )
    except Exception as e:
        logger.exception("Campaign generation pipeline error")
        subject = resolve_subject(request.subject_context, request.subject_name)
        return GenerationOutcome(
            artifact=synthesize_for_request(request),
            subject=subject,
            success=False,
            error=str(e) or "Campaign generation failed",
        )


async def continue_conversation(
    request: ConverseRequest,
    cache: ContextCache,
    invoker: RetryableInvoker,
    history_window: int = HISTORY_WINDOW,
) -> ConversationOutcome:
    """
    Answer one chat turn. Raises `GenerationUnavailable` if the model call fails.
    """
    cache.maybe_sweep()

    ctx = request.subject_context
    subject = Subject(name=ctx.name or DEFAULT_NAME, category=ctx.category or DEFAULT_CATEGORY)
    key = conversation_key(subject.name, subject.category)

    entry = cache.get(key)
    if not request.is_initialized or entry is None:
        system_context = build_system_context(subject, ctx)
        cache.put(key, system_context)
        messages = build_conversation_messages(system_context, request.message)
        rebuilt = True
    else:
        cache.touch(key)
        history = request.history[-history_window:] if history_window > 0 else []
        messages = build_conversation_messages(entry.system_context, request.message, history)
        rebuilt = False

    logger.info("Conversation turn for %s (context %s)", key, "built" if rebuilt else "cached")
    reply = await conversation_step(invoker, messages)
    return ConversationOutcome(reply=reply, key=key, rebuilt_context=rebuilt)

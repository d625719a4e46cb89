from __future__ import annotations
from functools import lru_cache
from ..config import settings
from ..graph.graph import build_graph
from ..graph.lookup import JsonAnalysisLookup
from ..graph.memory import ContextCache
from ..graph.nodes import build_campaign_invoker, build_chat_invoker

@lru_cache(maxsize=1)
def get_context_cache():
    return ContextCache(
        retention_seconds=settings.context_retention_seconds,
        sweep_probability=settings.context_sweep_probability,
    )

@lru_cache(maxsize=1)
def get_lookup():
    return JsonAnalysisLookup(settings.analyses_dir)

@lru_cache(maxsize=1)
def get_campaign_invoker():
    return build_campaign_invoker(settings)

@lru_cache(maxsize=1)
def get_chat_invoker():
    return build_chat_invoker(settings)

@lru_cache(maxsize=1)
def get_graph():
    return build_graph(get_campaign_invoker(), get_lookup())

"""
main.py
-------
FastAPI app exposing the generation pipeline:
- POST /generate-artifact: always 200 for a well-formed body; fallback content
  is flagged with success=false
- POST /converse: one conversational turn about a brand
Includes /health for liveness checks.
"""
from __future__ import annotations
import logging
from datetime import datetime, timezone
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from ..config import configure_logging, settings
from ..errors import InvalidRequest
from ..models import ConverseRequest, ConverseResponse, GenerateArtifactResponse, GenerationRequest
from .deps import get_chat_invoker, get_context_cache, get_graph
from ..graph.graph import continue_conversation, run_generation

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

APOLOGY_REPLY = "I apologize, but I encountered an error. Please try again."

app = FastAPI(title="Campaign Forge", version="1.0.0")


def _parse_generation_request(raw: bytes) -> GenerationRequest:
    if not raw or not raw.strip():
        raise InvalidRequest("Empty request body")
    try:
        return GenerationRequest.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidRequest(str(e)) from e


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/generate-artifact", response_model=GenerateArtifactResponse)
async def generate_artifact(request: Request, graph=Depends(get_graph)):
    """
    Generate a campaign artifact. The body is parsed by hand so malformed
    input gets the dashboard's 400 shape instead of FastAPI's 422.
    """
    try:
        req = _parse_generation_request(await request.body())
    except InvalidRequest as e:
        logger.warning("Rejected generation request: %s", e.message)
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Invalid request format", "mode": "error"},
        )

    outcome = await run_generation(graph, req)
    return GenerateArtifactResponse(
        success=outcome.success,
        artifact=outcome.artifact,
        mode=req.mode if outcome.success else "fallback",
        subject_name=outcome.subject.name,
        timestamp=datetime.now(timezone.utc).isoformat(),
        error=None if outcome.success else outcome.error or "Campaign generation failed",
    )


@app.post("/converse", response_model=ConverseResponse)
async def converse(
    req: ConverseRequest,
    cache=Depends(get_context_cache),
    invoker=Depends(get_chat_invoker),
):
    """Answer one chat message about the subject brand."""
    if not req.message.strip():
        return JSONResponse(status_code=400, content={"error": "Message is required"})

    try:
        outcome = await continue_conversation(req, cache, invoker, settings.chat_history_window)
    except Exception:
        logger.exception("Conversation turn failed")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process chat message", "reply": APOLOGY_REPLY, "success": False},
        )

    return ConverseResponse(reply=outcome.reply, success=True, conversation_key=outcome.key)

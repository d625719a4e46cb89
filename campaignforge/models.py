"""
models.py
---------
Pydantic models used by the API layer and the LangGraph state.

Wire names follow the dashboard's camelCase JSON; Python attributes stay
snake_case. Legacy names the dashboard still sends (`brandName`,
`guidedAnswers`, `homerun`, `thoughts`, `brandData`, `conversationHistory`)
are accepted as aliases.
"""
from __future__ import annotations
from typing import Any, Dict, List, Literal, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# --------------------------------------------------------------------------------------
# Requests
# --------------------------------------------------------------------------------------
class GuidedInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    objectives: Optional[str] = None
    success_definition: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("successDefinition", "homerun", "success_definition"),
    )
    notes: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("notes", "thoughts"),
    )


class GenerationRequest(BaseModel):
    """One request for a generated campaign artifact. Immutable once parsed."""
    model_config = ConfigDict(frozen=True)

    mode: Literal["auto", "guided"] = "auto"
    subject_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("subjectName", "brandName", "subject_name"),
    )
    subject_context: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("subjectContext", "subject_context"),
    )
    guided_inputs: Optional[GuidedInputs] = Field(
        default=None,
        validation_alias=AliasChoices("guidedInputs", "guidedAnswers", "guided_inputs"),
    )


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class SubjectContext(BaseModel):
    """Brand data the dashboard already holds for the conversation subject."""
    model_config = ConfigDict(extra="allow")

    name: str = Field(default="", validation_alias=AliasChoices("subjectName", "brandName", "name"))
    category: str = ""
    structured_analysis: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("structuredAnalysis", "structured_analysis"),
    )
    full_analysis: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("fullAnalysis", "full_analysis"),
    )
    social_data: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("socialData", "social_data"),
    )


class ConverseRequest(BaseModel):
    message: str = ""
    subject_context: SubjectContext = Field(
        default_factory=SubjectContext,
        validation_alias=AliasChoices("subjectContext", "brandData", "subject_context"),
    )
    is_initialized: bool = Field(
        default=False,
        validation_alias=AliasChoices("isInitialized", "is_initialized"),
    )
    history: List[ChatTurn] = Field(
        default_factory=list,
        validation_alias=AliasChoices("history", "conversationHistory"),
    )


# --------------------------------------------------------------------------------------
# Pipeline values
# --------------------------------------------------------------------------------------
class Subject(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: str


class GenerationState(BaseModel):
    """LangGraph state for one artifact generation run."""
    request: GenerationRequest
    record: Optional[Dict[str, Any]] = None
    subject: Optional[Subject] = None
    raw_text: Optional[str] = None
    parsed: Optional[Dict[str, Any]] = None
    artifact: Optional[Dict[str, Any]] = None
    success: bool = False
    error: Optional[str] = None


class GenerationOutcome(BaseModel):
    artifact: Dict[str, Any]
    subject: Subject
    success: bool
    error: Optional[str] = None


class ConversationOutcome(BaseModel):
    reply: str
    key: str
    rebuilt_context: bool


# --------------------------------------------------------------------------------------
# Responses
# --------------------------------------------------------------------------------------
class GenerateArtifactResponse(BaseModel):
    """Response model for /generate-artifact."""
    success: bool
    artifact: Dict[str, Any]
    mode: str
    subject_name: str = Field(serialization_alias="subjectName")
    timestamp: str
    error: Optional[str] = None


class ConverseResponse(BaseModel):
    """Response model for /converse."""
    reply: str
    success: bool
    conversation_key: str = Field(serialization_alias="conversationKey")

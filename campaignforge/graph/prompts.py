"""
prompts.py
----------
Centralized prompts and message builders for campaign generation and brand
conversations. The JSON structure shown to the model is rendered from
`ARTIFACT_SCHEMA`, so the prompt never drifts from what the repairer enforces.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from ..models import ChatTurn, GenerationRequest, Subject, SubjectContext
from .schema import ARTIFACT_SCHEMA, describe

NOT_SPECIFIED = "Not specified"
FULL_ANALYSIS_MIN_CHARS = 100

SYSTEM_CAMPAIGN = """You are an expert marketing strategist and campaign creator. Create a comprehensive, actionable marketing campaign.

CRITICAL: You MUST respond with a valid JSON object containing ALL required sections. Do not include any text before or after the JSON.

Required JSON structure:
{structure}

Make all content specific, actionable, and realistic. Include specific budgets, timelines, and metrics."""

CONVERSATION_INSTRUCTIONS = """
INSTRUCTIONS:
- This is an ongoing conversation, so maintain context and refer to previous messages naturally
- Answer questions conversationally and helpfully
- Use the data provided to give specific, accurate insights
- If asked about data you don't have, politely say so
- Keep responses helpful and concise but comprehensive when needed
- Focus on actionable insights when possible
- Use the brand name naturally in responses
- Remember that you're having a continuous dialogue with the user"""


def campaign_system_prompt() -> str:
    return SYSTEM_CAMPAIGN.format(structure=json.dumps(describe(ARTIFACT_SCHEMA), indent=2))


def _dump(record: Dict[str, Any]) -> str:
    return json.dumps(record, indent=2, ensure_ascii=False, default=str)


def build_generation_messages(
    request: GenerationRequest,
    subject: Subject,
    record: Optional[Dict[str, Any]] = None,
) -> List[BaseMessage]:
    if request.mode == "guided":
        guided = request.guided_inputs
        user = (
            f"Create a comprehensive marketing campaign for {subject.name} based on these user objectives:\n\n"
            f"OBJECTIVES: {(guided and guided.objectives) or NOT_SPECIFIED}\n"
            f"SUCCESS DEFINITION: {(guided and guided.success_definition) or NOT_SPECIFIED}\n"
            f"ADDITIONAL CONTEXT: {(guided and guided.notes) or NOT_SPECIFIED}\n\n"
            + (f"Analysis data available:\n{_dump(record)}" if record else "Use user inputs as primary guidance.")
            + "\n\nAddress the user's specific goals and success criteria."
        )
    else:
        user = (
            f"Create a comprehensive marketing campaign for {subject.name} in the {subject.category} category.\n\n"
            + (
                f"Use this analysis data for insights:\n{_dump(record)}"
                if record
                else "Create a strategic campaign with industry best practices."
            )
            + "\n\nFocus on data-driven strategies and measurable outcomes."
        )
    return [SystemMessage(content=campaign_system_prompt()), HumanMessage(content=user)]


# --------------------------------------------------------------------------------------
# Conversation context
# --------------------------------------------------------------------------------------
def _or_na(value: Any) -> str:
    return str(value) if value not in (None, "") else "N/A"


def _str_or_na(value: Any) -> str:
    return value if isinstance(value, str) and value else "N/A"


def _join(values: Any) -> str:
    if isinstance(values, list) and values:
        return ", ".join(str(v) for v in values)
    return "N/A"


def _structured_sections(analysis: Dict[str, Any]) -> str:
    out = ""
    snapshot = analysis.get("executiveSnapshot")
    if isinstance(snapshot, dict):
        out += (
            "EXECUTIVE SUMMARY:\n"
            f"Key Insight: {_or_na(snapshot.get('keyInsight'))}\n"
            f"Summary: {_or_na(snapshot.get('summary'))}\n\n"
        )
        info = snapshot.get("companyInfo")
        if isinstance(info, dict):
            out += (
                "COMPANY INFO:\n"
                f"- Size: {_or_na(info.get('size'))}\n"
                f"- Employees: {_str_or_na(info.get('employees'))}\n"
                f"- Revenue: {_str_or_na(info.get('revenue'))}\n"
                f"- Founded: {_or_na(info.get('founded'))}\n"
                f"- Headquarters: {_or_na(info.get('headquarters'))}\n\n"
            )

    challenge = analysis.get("businessChallenge")
    if isinstance(challenge, dict):
        out += (
            "BUSINESS CHALLENGES:\n"
            f"Objective: {_or_na(challenge.get('commercialObjective'))}\n"
            f"Top Challenges: {_join(challenge.get('topChallenges'))}\n"
            f"Strengths: {_join(challenge.get('strengths'))}\n"
            f"Weaknesses: {_join(challenge.get('weaknesses'))}\n\n"
        )

    audience = analysis.get("audience")
    personas = audience.get("corePersonas") if isinstance(audience, dict) else None
    if isinstance(personas, list) and personas:
        lines = []
        for i, persona in enumerate(personas[:2], start=1):
            if isinstance(persona, dict):
                detail = persona.get("description") or persona.get("title") or ""
                lines.append(f"Persona {i}: {persona.get('name', '')} - {detail}")
        out += "TARGET AUDIENCE:\n" + "\n".join(lines) + "\n\n"

    competition = analysis.get("categoryCompetition")
    if isinstance(competition, dict):
        market_size = competition.get("marketSize") if isinstance(competition.get("marketSize"), dict) else {}
        competitors = competition.get("topCompetitors")
        if isinstance(competitors, list) and competitors:
            top = "\n".join(
                f"- {c.get('name', '')}: {c.get('position', '')} (Revenue: {_str_or_na(c.get('revenue'))})"
                for c in competitors[:3]
                if isinstance(c, dict)
            )
        else:
            top = "N/A"
        out += (
            "COMPETITIVE LANDSCAPE:\n"
            f"Market Overview: {_or_na(competition.get('overview'))}\n"
            f"Market Size: {_str_or_na(market_size.get('marketValue'))}\n\n"
            f"Top Competitors:\n{top}\n\n"
        )
    return out


def _social_metrics(social: Dict[str, Any]) -> str:
    mentions = social.get("mentions")
    sentiment = social.get("sentiment") if isinstance(social.get("sentiment"), dict) else {}
    return (
        "SOCIAL METRICS:\n"
        f"- Total Mentions: {f'{mentions:,}' if isinstance(mentions, (int, float)) else _or_na(mentions)}\n"
        f"- Positive Sentiment: {_or_na(sentiment.get('positive'))}%\n"
        f"- Negative Sentiment: {_or_na(sentiment.get('negative'))}%\n"
        f"- Engagement Rate: {_or_na(social.get('engagementRate'))}%\n"
        f"- Share of Voice: {_or_na(social.get('shareOfVoice'))}%\n\n"
    )


def build_system_context(subject: Subject, context: SubjectContext) -> str:
    """
    Build the system context for a brand conversation.
    A full analysis text wins; otherwise structured sections and social metrics are summarized.
    """
    text = (
        f"You are an expert brand analyst with comprehensive knowledge about {subject.name}, "
        f"a company in the {subject.category} industry. You have access to detailed analysis data "
        "and should answer questions naturally and helpfully.\n\n"
        f"BRAND: {subject.name}\n"
        f"CATEGORY: {subject.category}\n\n"
        "You are having an ongoing conversation with a user about this brand. Maintain context from "
        "previous messages and provide consistent, helpful responses. If you reference previous parts "
        "of the conversation, do so naturally.\n\n"
    )

    full = context.full_analysis
    if isinstance(full, str) and len(full) > FULL_ANALYSIS_MIN_CHARS:
        text += f"COMPLETE BRAND ANALYSIS:\n{full}\n\n"
    else:
        if context.structured_analysis:
            text += _structured_sections(context.structured_analysis)
        if context.social_data:
            text += _social_metrics(context.social_data)

    return text + CONVERSATION_INSTRUCTIONS


def build_conversation_messages(
    system_context: str,
    message: str,
    history: Optional[Sequence[ChatTurn]] = None,
) -> List[BaseMessage]:
    msgs: List[BaseMessage] = [SystemMessage(content=system_context)]
    for turn in history or []:
        if turn.role == "assistant":
            msgs.append(AIMessage(content=turn.content))
        else:
            msgs.append(HumanMessage(content=turn.content))
    msgs.append(HumanMessage(content=message))
    return msgs

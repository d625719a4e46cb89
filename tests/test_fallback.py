"""Tests for deterministic fallback synthesis."""

from __future__ import annotations

from campaignforge.graph.fallback import synthesize, synthesize_for_request
from campaignforge.graph.repair import repair
from campaignforge.graph.schema import ARTIFACT_SCHEMA, get_path, list_paths, section_names
from campaignforge.models import GenerationRequest, GuidedInputs, Subject

SUBJECT = Subject(name="Acme", category="Snacks")


def test_conforms_to_schema() -> None:
    artifact = synthesize(SUBJECT)
    assert list(artifact) == section_names()
    for path in list_paths():
        assert isinstance(get_path(artifact, path), list), path
    # Nothing left for the repairer to do.
    assert repair(artifact, ARTIFACT_SCHEMA, lambda: {}) == artifact


def test_deterministic() -> None:
    guided = GuidedInputs(objectives="Win Gen Z", success_definition="1M signups")
    assert synthesize(SUBJECT, guided) == synthesize(SUBJECT, guided)


def test_fresh_containers_per_call() -> None:
    first = synthesize(SUBJECT)
    first["strategy"]["channels"].append("Skywriting")
    assert "Skywriting" not in synthesize(SUBJECT)["strategy"]["channels"]


def test_subject_woven_into_text() -> None:
    artifact = synthesize(SUBJECT)
    assert "Acme" in artifact["campaignSummary"]["overview"]
    assert "Snacks" in artifact["category"]["landscape"]


def test_guided_inputs_used_verbatim() -> None:
    guided = GuidedInputs(objectives="Win Gen Z", success_definition="1M signups", notes="ignored")
    artifact = synthesize(SUBJECT, guided)
    assert artifact["businessChallenge"]["objectives"] == ["Win Gen Z"]
    assert artifact["ambition"]["primaryGoal"] == "1M signups"


def test_generic_content_without_guided_inputs() -> None:
    artifact = synthesize(SUBJECT)
    assert len(artifact["businessChallenge"]["objectives"]) == 4
    assert "Acme" in artifact["ambition"]["primaryGoal"]
    assert len(artifact["strategy"]["phases"]) == 3


def test_for_request_without_lookup() -> None:
    request = GenerationRequest.model_validate({"mode": "auto", "subjectName": "acme"})
    artifact = synthesize_for_request(request)
    assert artifact["productBrand"]["coreMessage"].startswith("Acme")
    assert "Consumer Goods" in artifact["category"]["landscape"]

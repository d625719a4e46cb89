"""Tests for the artifact schema and schema repair."""

from __future__ import annotations

import pytest

from campaignforge.graph.fallback import synthesize
from campaignforge.graph.repair import repair
from campaignforge.graph.schema import (
    ARTIFACT_SCHEMA,
    ListOf,
    Record,
    Scalar,
    describe,
    get_path,
    list_paths,
    record,
    section_names,
    set_path,
)
from campaignforge.models import Subject

SUBJECT = Subject(name="Acme", category="Snacks")


def provider():
    return synthesize(SUBJECT)


def assert_conforms(value, schema=ARTIFACT_SCHEMA) -> None:
    for name in section_names(schema):
        assert name in value, name
    for path in list_paths(schema):
        assert isinstance(get_path(value, path), list), path


class TestSchema:
    def test_twelve_sections(self) -> None:
        assert section_names() == [
            "campaignSummary", "businessChallenge", "audience", "category",
            "productBrand", "culture", "strategy", "propositionPlatform",
            "keyDetails", "ambition", "thoughtStarters", "keyDeliverables",
        ]

    def test_list_paths_are_dotted_and_not_descended(self) -> None:
        paths = list(list_paths())
        assert "strategy.channels" in paths
        assert "strategy.phases" in paths
        assert "strategy.phases.tactics" not in paths
        assert "audience.primary" not in paths
        assert len(paths) == 27

    def test_describe_renders_skeleton(self) -> None:
        skeleton = describe(ARTIFACT_SCHEMA)
        assert skeleton["strategy"]["channels"] == ["array of strings"]
        assert skeleton["strategy"]["phases"][0]["tactics"] == ["array of strings"]
        assert skeleton["audience"]["primary"]["demographics"] == "string"

    def test_set_path_replaces_non_dict_parents(self) -> None:
        obj = {"a": "oops"}
        set_path(obj, "a.b.c", [])
        assert obj == {"a": {"b": {"c": []}}}

    def test_get_path_missing(self) -> None:
        assert get_path({"a": {"b": 1}}, "a.x.y") is None
        assert get_path({"a": [1]}, "a.b") is None


class TestRepairTotality:
    @pytest.mark.parametrize(
        "value",
        [
            {},
            None,
            "not a dict",
            [1, 2],
            {"campaignSummary": {"overview": "x"}},
            {"strategy": "a string where a record belongs"},
            {"strategy": {"channels": None, "phases": "phase 1"}},
            {"businessChallenge": {"objectives": "grow"}, "extra": {"kept": True}},
        ],
    )
    def test_every_section_and_list_present(self, value) -> None:
        assert_conforms(repair(value, ARTIFACT_SCHEMA, provider))

    def test_valid_sections_are_kept(self) -> None:
        result = repair({"campaignSummary": {"overview": "x"}}, ARTIFACT_SCHEMA, provider)
        assert result["campaignSummary"] == {"overview": "x"}
        assert result["strategy"] == provider()["strategy"]

    def test_unknown_keys_survive(self) -> None:
        result = repair({"extra": 1}, ARTIFACT_SCHEMA, provider)
        assert result["extra"] == 1

    def test_input_not_mutated(self) -> None:
        value = {"strategy": {"channels": "tv"}}
        repair(value, ARTIFACT_SCHEMA, provider)
        assert value == {"strategy": {"channels": "tv"}}

    def test_fallback_provider_called_at_most_once(self) -> None:
        calls = []

        def counting():
            calls.append(1)
            return provider()

        repair({}, ARTIFACT_SCHEMA, counting)
        assert len(calls) == 1

    def test_complete_value_never_calls_provider(self) -> None:
        def forbidden():
            raise AssertionError("fallback should not be needed")

        complete = provider()
        assert repair(complete, ARTIFACT_SCHEMA, forbidden) == complete

    def test_custom_schema(self) -> None:
        schema = record(meta=record(tags=ListOf(Scalar())), title=Scalar())
        result = repair({"meta": {"tags": "a,b"}}, schema, lambda: {"meta": {}, "title": "T"})
        assert result == {"meta": {"tags": []}, "title": "T"}
        assert isinstance(schema, Record)


class TestLossyListRepair:
    """Malformed list fields are replaced, not salvaged. This loses data on purpose."""

    def test_comma_string_is_discarded(self) -> None:
        result = repair({"strategy": {"channels": "TV, Radio"}}, ARTIFACT_SCHEMA, provider)
        assert result["strategy"]["channels"] == []

    def test_single_object_phase_is_discarded(self) -> None:
        phase = {"phase": "Launch", "duration": "4 weeks", "focus": "x", "tactics": []}
        result = repair({"strategy": {"phases": phase}}, ARTIFACT_SCHEMA, provider)
        assert result["strategy"]["phases"] == []

    def test_missing_list_inside_present_section_becomes_empty(self) -> None:
        result = repair({"strategy": {"approach": "x"}}, ARTIFACT_SCHEMA, provider)
        assert result["strategy"]["approach"] == "x"
        assert result["strategy"]["channels"] == []

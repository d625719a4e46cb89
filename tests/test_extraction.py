"""Tests for multi-strategy JSON extraction."""

from __future__ import annotations

import json

import pytest

from campaignforge.errors import ExtractionFailed
from campaignforge.graph.extraction import (
    DEFAULT_STRATEGIES,
    ResponseExtractor,
    extract,
    parse_cleaned,
    parse_code_fence,
    parse_direct,
    parse_object_span,
)

VALUES = [
    {"campaignSummary": {"overview": "x"}},
    {"nested": {"list": [1, 2, {"deep": None}], "flag": True}, "text": "with `ticks` and {braces}"},
    [{"a": 1}, {"b": [2, 3]}],
    {},
]


class TestStrategyOrder:
    @pytest.mark.parametrize("value", VALUES)
    def test_clean_input_round_trips(self, value) -> None:
        assert extract(json.dumps(value)) == value

    @pytest.mark.parametrize("value", VALUES)
    def test_fenced_json_with_prose(self, value) -> None:
        raw = "Here is your result:\n```json\n" + json.dumps(value, indent=2) + "\n```"
        assert extract(raw) == value

    def test_bare_fence(self) -> None:
        raw = 'Sure!\n```\n{"a": 1}\n```\nAnything else?'
        assert extract(raw) == {"a": 1}

    def test_uppercase_json_fence(self) -> None:
        assert extract('```JSON\n{"a": 1}\n```') == {"a": 1}

    def test_single_backticks(self) -> None:
        assert extract('The answer is `{"a": 1}` as requested') == {"a": 1}

    def test_object_embedded_in_prose(self) -> None:
        raw = 'I created the plan. {"a": {"b": 2}} Let me know if you need changes.'
        assert extract(raw) == {"a": {"b": 2}}

    def test_cleaned_text_with_unclosed_fence(self) -> None:
        raw = '```json\n\n[1, 2,\n\n 3]'
        assert parse_direct(raw) is None
        assert parse_code_fence(raw) is None
        assert parse_object_span(raw) is None
        assert parse_cleaned(raw) == [1, 2, 3]
        assert extract(raw) == [1, 2, 3]

    def test_default_order(self) -> None:
        assert [name for name, _ in DEFAULT_STRATEGIES] == ["direct", "code_fence", "object_span", "cleaned"]


class TestFailures:
    @pytest.mark.parametrize("raw", ["", None, "no json here at all", "{not: valid, json}", '"just a string"'])
    def test_exhausted_chain_raises(self, raw) -> None:
        with pytest.raises(ExtractionFailed):
            extract(raw)

    def test_require_object_skips_arrays(self) -> None:
        with pytest.raises(ExtractionFailed):
            ResponseExtractor(require_object=True).extract("[1, 2, 3]")

    def test_require_object_keeps_searching(self) -> None:
        raw = 'Options: `[1, 2]`\n{"picked": 2}'
        assert ResponseExtractor(require_object=True).extract(raw) == {"picked": 2}

    def test_raising_strategy_does_not_abort_chain(self) -> None:
        def broken(text: str):
            raise RuntimeError("boom")

        extractor = ResponseExtractor(strategies=[("broken", broken), ("direct", parse_direct)])
        assert extractor.extract('{"ok": true}') == {"ok": True}

    def test_custom_strategy_list(self) -> None:
        extractor = ResponseExtractor(strategies=[("direct", parse_direct)])
        with pytest.raises(ExtractionFailed):
            extractor.extract('```json\n{"a": 1}\n```')

"""
extraction.py
-------------
Recover a structured value from free-form model output.

Models are told to answer with a single JSON object but regularly wrap it in
prose or code fences. `ResponseExtractor` folds over an ordered list of cheap
strategies and returns the first one that parses:

1. the whole text
2. the inner content of a code fence (```json, bare ```, then single backticks)
3. the greedy span from the first `{` to the last `}`
4. the whole text with fence markers and blank lines stripped

Only JSON objects and arrays count as structured values; a bare string or
number is treated as a failed parse for that strategy.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Optional, Sequence, Tuple

from ..errors import ExtractionFailed

logger = logging.getLogger(__name__)

Strategy = Callable[[str], Optional[Any]]

_FENCE_PATTERNS = (
    re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE),
    re.compile(r"```\s*([\s\S]*?)\s*```"),
    re.compile(r"`([\s\S]*?)`"),
)
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
_JSON_FENCE = re.compile(r"```json", re.IGNORECASE)
_BLANK_LINES = re.compile(r"^\s*[\r\n]+", re.MULTILINE)


def _loads(text: str) -> Optional[Any]:
    try:
        value = json.loads(text)
    except (ValueError, TypeError):
        return None
    return value if isinstance(value, (dict, list)) else None


# --------------------------------------------------------------------------------------
# Strategies
# --------------------------------------------------------------------------------------
def parse_direct(text: str) -> Optional[Any]:
    return _loads(text)


def parse_code_fence(text: str) -> Optional[Any]:
    for pattern in _FENCE_PATTERNS:
        m = pattern.search(text)
        if m and m.group(1):
            value = _loads(m.group(1).strip())
            if value is not None:
                return value
    return None


def parse_object_span(text: str) -> Optional[Any]:
    m = _OBJECT_PATTERN.search(text)
    return _loads(m.group(0)) if m else None


def parse_cleaned(text: str) -> Optional[Any]:
    cleaned = _JSON_FENCE.sub("", text).replace("```", "")
    cleaned = _BLANK_LINES.sub("", cleaned).strip()
    return _loads(cleaned)


DEFAULT_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("direct", parse_direct),
    ("code_fence", parse_code_fence),
    ("object_span", parse_object_span),
    ("cleaned", parse_cleaned),
)


class ResponseExtractor:
    """Apply extraction strategies in order; first structured value wins."""

    def __init__(
        self,
        strategies: Sequence[Tuple[str, Strategy]] = DEFAULT_STRATEGIES,
        require_object: bool = False,
    ) -> None:
        self.strategies = tuple(strategies)
        self.require_object = require_object

    def extract(self, raw_text: str) -> Any:
        if not raw_text or not isinstance(raw_text, str):
            raise ExtractionFailed("Empty or invalid response from model")

        for name, strategy in self.strategies:
            try:
                value = strategy(raw_text)
            except Exception as e:  # a broken strategy must not abort the chain
                logger.debug("Extraction strategy %s raised %r", name, e)
                continue
            if value is None:
                logger.debug("Extraction strategy %s found nothing", name)
                continue
            if self.require_object and not isinstance(value, dict):
                logger.debug("Extraction strategy %s produced a non-object", name)
                continue
            logger.info("Extraction strategy %s succeeded", name)
            return value

        raise ExtractionFailed()


def extract(raw_text: str, require_object: bool = False) -> Any:
    """Module-level convenience over `ResponseExtractor` with default strategies."""
    return ResponseExtractor(require_object=require_object).extract(raw_text)

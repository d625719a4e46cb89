"""
lookup.py
---------
Read-only access to prior brand analyses used to seed generation prompts.

The analyses themselves are produced and stored elsewhere; this module only
needs `lookup(subject_name)` and `latest()`. `JsonAnalysisLookup` reads a
directory of JSON files, one per subject (`<slug>.json`). A file may hold the
analysis object directly or a row-like wrapper whose `analysis` field is the
analysis as an object or as a JSON string.

`safe_lookup` is what the pipeline calls: it tries the named subject, then
the most recent analysis, and degrades every failure to "no context".
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from .subject import usable_name

logger = logging.getLogger(__name__)


class AnalysisLookup(Protocol):
    def lookup(self, subject_name: str) -> Optional[Dict[str, Any]]: ...

    def latest(self) -> Optional[Dict[str, Any]]: ...


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.strip().lower()).strip("-")


def _coerce(data: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(data, dict):
        return None
    analysis = data.get("analysis")
    if isinstance(analysis, str):
        parsed = json.loads(analysis)
        return parsed if isinstance(parsed, dict) else None
    if isinstance(analysis, dict):
        return analysis
    return data


class JsonAnalysisLookup:
    def __init__(self, root: str) -> None:
        self.root = Path(root)

    def _path(self, subject_name: str) -> Path:
        return self.root / f"{slugify(subject_name)}.json"

    def _read(self, path: Path) -> Optional[Dict[str, Any]]:
        return _coerce(json.loads(path.read_text(encoding="utf-8")))

    def lookup(self, subject_name: str) -> Optional[Dict[str, Any]]:
        p = self._path(subject_name)
        if not p.exists():
            return None
        return self._read(p)

    def latest(self) -> Optional[Dict[str, Any]]:
        if not self.root.is_dir():
            return None
        files = sorted(self.root.glob("*.json"), key=lambda p: p.stat().st_mtime, reverse=True)
        for p in files:
            try:
                return self._read(p)
            except ValueError:
                logger.warning("Could not parse analysis %s, trying next", p.name)
        return None


class NullLookup:
    """Lookup with no analyses; every request runs without context."""

    def lookup(self, subject_name: str) -> Optional[Dict[str, Any]]:
        return None

    def latest(self) -> Optional[Dict[str, Any]]:
        return None


def safe_lookup(lookup: AnalysisLookup, subject_name: Optional[str]) -> Optional[Dict[str, Any]]:
    try:
        if usable_name(subject_name):
            record = lookup.lookup(subject_name.strip())
            if record:
                logger.info("Using analysis for %s", subject_name)
                return record
        logger.info("Falling back to latest analysis")
        return lookup.latest()
    except Exception:
        logger.exception("Analysis lookup failed; continuing without context")
        return None

"""
repair.py
---------
Force a partially valid artifact into full conformance with a schema.

Two passes over the declared schema:
- every top-level section that is missing (or is not an object where the
  schema declares a record) is replaced by the same section of a fallback
  artifact; the fallback is produced lazily, at most once per call
- every list-typed path that does not hold a list is replaced by `[]`

The second pass is lossy: a malformed value at a list path (say a comma
separated string) is discarded rather than coerced.
"""
from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict

from .schema import ARTIFACT_SCHEMA, Record, get_path, list_paths, set_path

logger = logging.getLogger(__name__)

FallbackProvider = Callable[[], Dict[str, Any]]


def repair(
    value: Any,
    schema: Record = ARTIFACT_SCHEMA,
    fallback_provider: FallbackProvider = dict,
) -> Dict[str, Any]:
    """Total: never raises for any input value."""
    result: Dict[str, Any] = copy.deepcopy(value) if isinstance(value, dict) else {}
    fallback: Dict[str, Any] | None = None

    for name, node in schema.fields:
        current = result.get(name)
        wrong_shape = isinstance(node, Record) and not isinstance(current, dict)
        if name in result and not wrong_shape:
            continue
        if fallback is None:
            fallback = fallback_provider()
        logger.warning("Missing or invalid section %s, using fallback", name)
        result[name] = copy.deepcopy(fallback.get(name, {} if isinstance(node, Record) else None))

    for path in list_paths(schema):
        if not isinstance(get_path(result, path), list):
            logger.warning("Field %s is not a list, replacing with []", path)
            set_path(result, path, [])

    return result

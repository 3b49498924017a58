from __future__ import annotations

import json
from typing import Any

from .errors import ParseError, SerializeError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name!r}")


def loads_object(raw: str) -> dict[str, Any]:
    """
    Parse document text into a root object.

    Empty text is an empty object. Anything else, whitespace included, must be
    strict JSON with an object at the root.
    """
    if not raw:
        return {}
    try:
        doc = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise ParseError(f"invalid JSON document: {e}") from e
    if not isinstance(doc, dict):
        raise ParseError(f"JSON document root must be an object, got {type(doc).__name__}")
    return doc


def dumps_pretty(payload: Any, *, indent: int = 2) -> str:
    """
    Pretty-print a tree, keeping key insertion order.
    """
    try:
        return json.dumps(payload, indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializeError(f"tree cannot be written as JSON: {e}") from e

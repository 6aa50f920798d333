"""Pull the JSON payload out of the model's free-form reply.

Best-effort, in this order:
1. Greedy match: first ``{`` to last ``}``.
2. Balanced match: first ``{`` to its matching ``}``, string-aware. Covers
   replies that put stray braces in prose after the payload.
3. The whole reply.

A reply that is a bare top-level JSON array is rejected outright rather than
mined for the first object inside it.

Replies with stray braces *before* the payload can still mis-extract; the
prompt asks for a bare JSON reply to keep that rare.
"""

from __future__ import annotations

import json
import re
from typing import Any

import structlog

from costume.errors import ExtractionError

log = structlog.get_logger("costume.extraction")

PARSE_ERROR_MESSAGE = "Failed to parse model response JSON"

_GREEDY_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def _try_parse(text: str) -> Any | None:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def _balanced_object(text: str) -> str | None:
    """Return the first brace-balanced ``{...}`` block, or None."""
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escape_next = False
    for i in range(start, len(text)):
        ch = text[i]
        if escape_next:
            escape_next = False
            continue
        if in_string:
            if ch == "\\":
                escape_next = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def extract_json(text: str) -> dict[str, Any]:
    """Parse the JSON object embedded in ``text``.

    Raises:
        ExtractionError: nothing parseable was found, or the payload is not
            a JSON object.
    """
    stripped = text.strip()
    if stripped.startswith("[") and isinstance(_try_parse(stripped), list):
        log.warning("costume_extraction_not_object", reply_chars=len(text))
        raise ExtractionError(PARSE_ERROR_MESSAGE)

    candidates: list[str] = []
    match = _GREEDY_OBJECT_RE.search(text)
    if match:
        candidates.append(match.group(0))
        balanced = _balanced_object(text)
        if balanced and balanced != match.group(0):
            candidates.append(balanced)
    candidates.append(stripped)

    for candidate in candidates:
        data = _try_parse(candidate)
        if isinstance(data, dict):
            return data

    log.warning("costume_extraction_failed", reply_chars=len(text))
    raise ExtractionError(PARSE_ERROR_MESSAGE)


def raw_items(data: dict[str, Any]) -> list[Any]:
    """Return the ``items`` sequence of an extracted payload ([] if absent)."""
    items = data.get("items")
    if isinstance(items, list):
        return items
    log.warning("costume_items_missing", keys=sorted(data.keys())[:10])
    return []

"""
JSON extraction for LLM responses.

Handles the formats the scoring model actually returns:
- Clean JSON
- JSON in ```json blocks (or bare ``` blocks)
- JSON object surrounded by prose
"""

import json
import re

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def extract_json(text: str) -> dict | list | None:
    """
    Extract a JSON payload from a model response.

    Args:
        text: Raw model response text

    Returns:
        Parsed JSON (dict or list) or None if nothing parses
    """
    if not text or not text.strip():
        return None

    stripped = _FENCE.sub("", text).strip()
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        pass

    start = stripped.find("{")
    if start == -1:
        return None
    candidate = _extract_balanced(stripped, start)
    if candidate is None:
        return None
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        return None


def _extract_balanced(text: str, start: int) -> str | None:
    """Return the ``{...}`` block starting at ``start``, respecting strings."""
    depth = 0
    in_string = False
    escape_next = False

    for i, char in enumerate(text[start:], start):
        if escape_next:
            escape_next = False
            continue
        if char == "\\" and in_string:
            escape_next = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    return None

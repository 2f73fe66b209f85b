"""Robust JSON extraction for LLM responses.

Local models rarely answer with bare JSON:
- Some wrap it in markdown code blocks (```json...```)
- Some add explanatory text before/after
- Some return malformed JSON

The helpers here recover the JSON object where possible.
"""

import json
import re
from typing import Any, Optional

_FENCE_PATTERNS = (
    re.compile(r"```json\s*\n?(.*?)\n?```", re.DOTALL | re.IGNORECASE),
    re.compile(r"```\s*\n?(.*?)\n?```", re.DOTALL),
)


def extract_json_object(text: str) -> Optional[str]:
    """Return the substring from the first '{' to the last '}' inclusive.

    Returns None when there is no '{', no '}', or they are out of order.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return text[start : end + 1]


def parse_json_response(text: str) -> Optional[dict[str, Any]]:
    """Parse a JSON object from an LLM response.

    Args:
        text: Raw LLM response text.

    Returns:
        Parsed JSON dict, or None if parsing fails.
    """
    if not text or not text.strip():
        return None

    text = text.strip()

    # Strategy 1: Try direct JSON parse
    result = _try_direct_parse(text)
    if result is not None:
        return result

    # Strategy 2: Extract from markdown code block
    for pattern in _FENCE_PATTERNS:
        match = pattern.search(text)
        if match:
            result = _try_direct_parse(match.group(1).strip())
            if result is not None:
                return result

    # Strategy 3: Outermost braces, ignoring surrounding prose
    candidate = extract_json_object(text)
    if candidate is not None:
        return _try_direct_parse(candidate)

    return None


def _try_direct_parse(text: str) -> Optional[dict[str, Any]]:
    """Attempt direct JSON parsing; only objects count as success."""
    try:
        result = json.loads(text)
    except json.JSONDecodeError:
        return None
    return result if isinstance(result, dict) else None

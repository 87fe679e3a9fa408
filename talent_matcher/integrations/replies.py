"""
Parsing helpers for JSON replies from language models.

Models asked for "only JSON" still wrap it in code fences or prose now and
then, so parsing strips the fences first and then salvages the outermost
``{...}`` span.
"""

import json
import re

_FENCE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_OBJECT = re.compile(r"\{[\s\S]*\}")


def parse_json_object(content: str) -> dict:
    """
    Parse a JSON object out of a model reply.

    Raises:
        ValueError: If no JSON object can be recovered
    """
    if not content or not content.strip():
        raise ValueError("Empty reply")

    cleaned = _FENCE.sub("", content).replace("`", "").strip()
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        match = _OBJECT.search(content)
        if not match:
            raise ValueError("No JSON object found in reply")
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ValueError(f"Unable to parse reply as JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ValueError("Reply is not a JSON object")
    return parsed

"""Recover a JSON object from free-form LLM output."""

import json
from typing import Any

from personalens.errors import MalformedResponseError


def extract_json_object(raw_text: str) -> dict[str, Any]:
    """Parse the span between the first ``{`` and the last ``}`` as JSON.

    Surrounding prose and markdown fences are tolerated. Key validation is
    left to the caller.

    Args:
        raw_text: Raw model response text

    Returns:
        Parsed JSON object

    Raises:
        MalformedResponseError: If no brace pair is found or the span is not
            a valid JSON object
    """
    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise MalformedResponseError("No JSON object found in response.")

    try:
        parsed = json.loads(raw_text[start : end + 1])
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Invalid JSON in response: {e.msg}") from e

    return parsed


def require_string_fields(payload: dict[str, Any], fields: tuple[str, ...]) -> dict[str, str]:
    """Pick string-valued fields from an extracted payload.

    Raises:
        MalformedResponseError: If a field is missing or not a string
    """
    values: dict[str, str] = {}
    for field in fields:
        value = payload.get(field)
        if not isinstance(value, str):
            raise MalformedResponseError(
                f"Response field '{field}' is missing or not a string."
            )
        values[field] = value
    return values

"""Utilities for robustly extracting JSON from LLM responses."""

from __future__ import annotations
import json
import re
from typing import Any

_JSON_BLOCK = re.compile(r"(\{.*\}|\[.*\])", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang fence and a trailing ``` fence if present."""
    t = (text or "").strip()
    t = re.sub(r"^```[A-Za-z0-9_-]*\s*", "", t)
    t = re.sub(r"\s*```$", "", t)
    return t.strip()


def loads_strict(text: str) -> Any:
    """
    Parse JSON from an LLM reply or raise ValueError.
    - Strips code fences first.
    - Falls back to the first {...} / [...] block when prose surrounds it.
    """
    t = strip_code_fences(text)
    if not t:
        raise ValueError("Empty response.")
    try:
        return json.loads(t)
    except json.JSONDecodeError:
        pass

    m = _JSON_BLOCK.search(t)
    if not m:
        raise ValueError("No JSON found in response.")
    try:
        return json.loads(m.group(1))
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed JSON in response: {e}") from e


def require_array(text: str, err: str = "Expected a JSON array.") -> list:
    """Strict: must return an array, else raise."""
    data = loads_strict(text)
    if not isinstance(data, list):
        raise ValueError(err)
    return data

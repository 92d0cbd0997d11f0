"""Decoding of free-form model replies into JSON objects.

Models sometimes wrap the requested JSON in Markdown fences or precede it with
prose. Decoding runs in stages, each usable on its own:

1. strip_code_fences: drop ```json / ``` markers
2. direct parse when the cleaned text starts with "{"
3. extract_json_span: parse the text between the first "{" and the last "}"

The span in stage 3 is greedy, not bracket-balanced: a reply holding two
separate objects, e.g. "use {a} or {b}", yields an unparseable span.
"""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"```json\s*")
_FENCE_CLOSE_RE = re.compile(r"\s*```")
_JSON_SPAN_RE = re.compile(r"\{[\s\S]*\}")


class ResponseDecodeError(ValueError):
    """Raised when a model reply holds no usable JSON object."""


def strip_code_fences(text: str) -> str:
    """Remove Markdown code-fence markers and surrounding whitespace.

    Args:
        text: Raw model reply

    Returns:
        Reply without ```json openers or ``` markers, trimmed
    """
    cleaned = _FENCE_OPEN_RE.sub("", text)
    cleaned = _FENCE_CLOSE_RE.sub("", cleaned)
    return cleaned.strip()


def extract_json_span(text: str) -> str | None:
    """Return the text from the first "{" to the last "}".

    Args:
        text: Text that may contain a JSON object

    Returns:
        The bracketed span, or None if there is none
    """
    match = _JSON_SPAN_RE.search(text)
    return match.group(0) if match else None


def _parse_object(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except RecursionError as e:
        raise ResponseDecodeError("JSON in reply is nested too deeply") from e
    if not isinstance(data, dict):
        raise ResponseDecodeError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def decode_with_recovery(text: str | None) -> dict[str, Any]:
    """Decode a model reply into a JSON object.

    Args:
        text: Raw model reply

    Returns:
        Decoded JSON object

    Raises:
        ResponseDecodeError: If no stage yields a JSON object
    """
    if not text or not text.strip():
        raise ResponseDecodeError("Empty reply")

    cleaned = strip_code_fences(text)

    if cleaned.startswith("{"):
        try:
            return _parse_object(cleaned)
        except json.JSONDecodeError as e:
            logger.debug("Direct parse failed (%s), trying bracket span", e)

    span = extract_json_span(cleaned)
    if span is None:
        raise ResponseDecodeError("No JSON object found in reply")

    try:
        return _parse_object(span)
    except json.JSONDecodeError as e:
        raise ResponseDecodeError(f"Invalid JSON in reply: {e}") from e

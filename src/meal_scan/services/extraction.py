"""Extraction of the JSON payload from a model's text reply."""

import json
import logging
import re

from meal_scan.domain.errors import AnalysisFailure

INVALID_REPLY_MESSAGE = "Failed to get a valid analysis from the AI model."

_JSON_FENCE = re.compile(r"```json\s*(.*?)\s*```", re.IGNORECASE | re.DOTALL)
_ANY_FENCE = re.compile(r"```[^\S\n]*(?:[\w+-]+[^\S\n]*\n)?(.*?)```", re.DOTALL)

_logger = logging.getLogger(__name__)


def strip_code_fence(text: str) -> str:
    """Return the body of the first Markdown code fence, or the trimmed text."""
    match = _JSON_FENCE.search(text) or _ANY_FENCE.search(text)
    if match is None:
        return text.strip()
    return match.group(1).strip()


def extract_json(raw_text: str) -> dict[str, object]:
    """Parse the JSON object embedded in a model reply."""
    cleaned = strip_code_fence(raw_text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        _logger.error("Model reply is not valid JSON. Original reply: %r", raw_text)
        _logger.error("Attempted to parse this cleaned text: %r", cleaned)
        raise AnalysisFailure(INVALID_REPLY_MESSAGE) from exc
    if not isinstance(payload, dict):
        _logger.error("Model reply is not a JSON object. Original reply: %r", raw_text)
        raise AnalysisFailure(INVALID_REPLY_MESSAGE)
    return payload

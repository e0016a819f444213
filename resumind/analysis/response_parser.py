"""Turns the raw analysis response into validated Feedback."""

import json
from typing import Any

from resumind.analysis.exceptions import FeedbackValidationError
from resumind.analysis.models import Feedback
from resumind.analysis.validator import validate_feedback


def extract_message_content(response: Any) -> str | None:
    """Return the text of ``response["message"]["content"]``.

    Content may be a plain string or a list of parts, in which case the first
    part's ``text`` is used. Returns None for an absent, malformed or blank
    response.
    """
    if not isinstance(response, dict):
        return None
    message = response.get("message")
    if not isinstance(message, dict):
        return None

    content = message.get("content")
    if isinstance(content, list) and content and isinstance(content[0], dict):
        content = content[0].get("text")
    if not isinstance(content, str) or not content.strip():
        return None
    return content


def parse_feedback(raw: str) -> Feedback:
    """Parse the model's JSON answer, tolerating markdown code fences.

    Raises:
        FeedbackValidationError: if the text is not valid feedback JSON.
    """
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise FeedbackValidationError(f"Invalid JSON response: {exc}") from exc
    return validate_feedback(parsed)

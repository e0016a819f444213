"""Validates parsed feedback JSON and builds the Feedback model."""

from typing import Any

from resumind.analysis.exceptions import FeedbackValidationError
from resumind.analysis.models import SECTION_KEYS, TIP_TYPES, Feedback, FeedbackSection, Tip

_MAX_SCORE = 100
_MAX_TIPS = 20


def validate_feedback(data: Any) -> Feedback:
    """Validate raw parsed JSON and build a Feedback.

    Raises:
        FeedbackValidationError: on any validation failure.
    """
    if not isinstance(data, dict):
        raise FeedbackValidationError("Feedback must be an object")
    if "overallScore" not in data:
        raise FeedbackValidationError("Missing required field: overallScore")
    overall_score = _build_score(data["overallScore"], "overallScore")

    sections: dict[str, FeedbackSection] = {}
    for key, attr in SECTION_KEYS.items():
        if key not in data:
            raise FeedbackValidationError(f"Missing required section: {key}")
        sections[attr] = _build_section(data[key], key)
    return Feedback(overall_score=overall_score, **sections)


def _build_score(raw: Any, where: str) -> float:
    # bool is an int subclass; reject it explicitly.
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise FeedbackValidationError(f"'{where}' must be a number")
    if not 0 <= raw <= _MAX_SCORE:
        raise FeedbackValidationError(
            f"'{where}' must be between 0 and {_MAX_SCORE}, got {raw}"
        )
    return raw


def _build_section(raw: Any, key: str) -> FeedbackSection:
    if not isinstance(raw, dict):
        raise FeedbackValidationError(f"'{key}' must be an object")
    score = _build_score(raw.get("score"), f"{key}.score")
    tips_raw = raw.get("tips", [])
    if not isinstance(tips_raw, list):
        raise FeedbackValidationError(f"'{key}.tips' must be a list")
    if len(tips_raw) > _MAX_TIPS:
        raise FeedbackValidationError(
            f"Too many tips in '{key}': {len(tips_raw)} (max {_MAX_TIPS})"
        )
    tips = [_build_tip(item, key, i) for i, item in enumerate(tips_raw)]
    return FeedbackSection(score=score, tips=tips)


def _build_tip(raw: Any, key: str, index: int) -> Tip:
    if not isinstance(raw, dict):
        raise FeedbackValidationError(f"Tip {index} in '{key}' must be an object")
    tip_type = raw.get("type")
    if tip_type not in TIP_TYPES:
        raise FeedbackValidationError(
            f"Tip {index} in '{key}': 'type' must be one of {sorted(TIP_TYPES)}, "
            f"got {tip_type!r}"
        )
    tip = raw.get("tip")
    if not tip or not isinstance(tip, str):
        raise FeedbackValidationError(f"Tip {index} in '{key}': 'tip' must be a non-empty string")
    explanation = raw.get("explanation", "")
    if not isinstance(explanation, str):
        raise FeedbackValidationError(
            f"Tip {index} in '{key}': 'explanation' must be a string"
        )
    return Tip(type=tip_type, tip=tip, explanation=explanation)

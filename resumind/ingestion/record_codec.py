"""The single encode/decode pair for stored DocumentRecord values.

Stored shape (JSON object)::

    {"version": 1, "id": ..., "resumePath": ..., "imagePath": ...,
     "companyName": ..., "jobTitle": ..., "jobDescription": ...,
     "feedback": "" | {...}}

Values written before versioning carry no ``version`` and decode as version 1.
"""

import json
from typing import Any

from resumind.analysis.exceptions import FeedbackValidationError
from resumind.analysis.models import Feedback
from resumind.analysis.validator import validate_feedback
from resumind.ingestion.exceptions import MalformedRecordError
from resumind.ingestion.models import RECORD_VERSION, DocumentRecord

DEFAULT_KEY_PREFIX = "resume:"

_REQUIRED_FIELDS = ("id", "resumePath", "imagePath")
_OPTIONAL_FIELDS = ("companyName", "jobTitle", "jobDescription")


def record_key(record_id: str, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    return f"{prefix}{record_id}"


def encode_record(record: DocumentRecord) -> str:
    feedback: object = record.feedback.to_dict() if record.feedback is not None else ""
    return json.dumps(
        {
            "version": record.version,
            "id": record.id,
            "resumePath": record.resume_path,
            "imagePath": record.image_path,
            "companyName": record.company_name,
            "jobTitle": record.job_title,
            "jobDescription": record.job_description,
            "feedback": feedback,
        }
    )


def decode_record(value: str) -> DocumentRecord:
    """Decode a stored value.

    Raises:
        MalformedRecordError: if the value is not a valid record.
    """
    try:
        data = json.loads(value)
    except (json.JSONDecodeError, TypeError) as exc:
        raise MalformedRecordError(f"Record is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedRecordError("Record must be a JSON object")

    version = data.get("version", RECORD_VERSION)
    if version != RECORD_VERSION:
        raise MalformedRecordError(f"Unsupported record version: {version!r}")

    for name in _REQUIRED_FIELDS:
        if not isinstance(data.get(name), str):
            raise MalformedRecordError(f"Record field '{name}' must be a string")
    for name in _OPTIONAL_FIELDS:
        if not isinstance(data.get(name, ""), str):
            raise MalformedRecordError(f"Record field '{name}' must be a string")

    return DocumentRecord(
        id=data["id"],
        resume_path=data["resumePath"],
        image_path=data["imagePath"],
        company_name=data.get("companyName", ""),
        job_title=data.get("jobTitle", ""),
        job_description=data.get("jobDescription", ""),
        feedback=_decode_feedback(data.get("feedback", "")),
        version=version,
    )


def _decode_feedback(raw: Any) -> Feedback | None:
    if raw == "" or raw is None:
        return None
    try:
        return validate_feedback(raw)
    except FeedbackValidationError as exc:
        raise MalformedRecordError(f"Record feedback is invalid: {exc}") from exc

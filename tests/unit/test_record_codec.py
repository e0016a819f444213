import json

import pytest

from resumind.analysis.validator import validate_feedback
from resumind.ingestion.exceptions import MalformedRecordError
from resumind.ingestion.models import DocumentRecord
from resumind.ingestion.record_codec import decode_record, encode_record, record_key


def _make_record(**overrides: object) -> DocumentRecord:
    fields: dict[str, object] = {
        "id": "3f0c",
        "resume_path": "/a/cv.pdf",
        "image_path": "/b/cv.png",
        "company_name": "Acme",
        "job_title": "Engineer",
        "job_description": "Build things",
    }
    fields.update(overrides)
    return DocumentRecord(**fields)  # type: ignore[arg-type]


class TestRecordKey:
    def test_default_prefix(self) -> None:
        assert record_key("3f0c") == "resume:3f0c"

    def test_custom_prefix(self) -> None:
        assert record_key("3f0c", "cv:") == "cv:3f0c"


class TestEncodeRecord:
    def test_skeleton_has_empty_feedback(self) -> None:
        data = json.loads(encode_record(_make_record()))
        assert data == {
            "version": 1,
            "id": "3f0c",
            "resumePath": "/a/cv.pdf",
            "imagePath": "/b/cv.png",
            "companyName": "Acme",
            "jobTitle": "Engineer",
            "jobDescription": "Build things",
            "feedback": "",
        }

    def test_feedback_is_nested_object(self, feedback_payload: dict[str, object]) -> None:
        record = _make_record(feedback=validate_feedback(feedback_payload))
        data = json.loads(encode_record(record))
        assert data["feedback"] == feedback_payload


class TestDecodeRecord:
    def test_decodes_skeleton(self) -> None:
        record = _make_record()
        assert decode_record(encode_record(record)) == record

    def test_decodes_completed_record(self, feedback_payload: dict[str, object]) -> None:
        record = _make_record(feedback=validate_feedback(feedback_payload))
        decoded = decode_record(encode_record(record))
        assert decoded.id == record.id
        assert decoded.is_complete
        assert decoded.feedback == record.feedback

    def test_unversioned_value_decodes_as_current_version(self) -> None:
        value = json.dumps({"id": "1", "resumePath": "/a", "imagePath": "/b", "feedback": ""})
        record = decode_record(value)
        assert record.version == 1
        assert record.company_name == ""
        assert record.feedback is None

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("not json", "not valid JSON"),
            ("[]", "must be a JSON object"),
            (json.dumps({"id": "1", "resumePath": "/a"}), "imagePath"),
            (json.dumps({"id": 1, "resumePath": "/a", "imagePath": "/b"}), "'id'"),
            (
                json.dumps({"id": "1", "resumePath": "/a", "imagePath": "/b", "jobTitle": 3}),
                "jobTitle",
            ),
            (
                json.dumps({"version": 9, "id": "1", "resumePath": "/a", "imagePath": "/b"}),
                "Unsupported record version",
            ),
            (
                json.dumps(
                    {"id": "1", "resumePath": "/a", "imagePath": "/b", "feedback": {"x": 1}}
                ),
                "feedback is invalid",
            ),
            (
                json.dumps({"id": "1", "resumePath": "/a", "imagePath": "/b", "feedback": 0}),
                "feedback is invalid",
            ),
        ],
    )
    def test_rejects_malformed_values(self, value: str, message: str) -> None:
        with pytest.raises(MalformedRecordError, match=message):
            decode_record(value)

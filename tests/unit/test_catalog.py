import asyncio

import pytest

from resumind.analysis.models import Feedback, FeedbackSection
from resumind.ingestion.catalog import ResumeCatalog
from resumind.ingestion.exceptions import MalformedRecordError
from resumind.ingestion.models import DocumentRecord
from resumind.ingestion.record_codec import encode_record
from resumind.storage.memory import InMemoryBlobStore, InMemoryRecordStore


def _section(score: int) -> FeedbackSection:
    return FeedbackSection(score=score, tips=[])


def _record(record_id: str, image_path: str = "", with_feedback: bool = False) -> DocumentRecord:
    feedback = None
    if with_feedback:
        feedback = Feedback(
            overall_score=64,
            ats=_section(60),
            tone_and_style=_section(70),
            content=_section(65),
            structure=_section(55),
            skills=_section(68),
        )
    return DocumentRecord(
        id=record_id,
        resume_path=f"/{record_id}/cv.pdf",
        image_path=image_path,
        company_name="Acme",
        feedback=feedback,
    )


def _catalog() -> tuple[ResumeCatalog, InMemoryRecordStore, InMemoryBlobStore]:
    record_store, blob_store = InMemoryRecordStore(), InMemoryBlobStore()
    return ResumeCatalog(record_store, blob_store), record_store, blob_store


class TestResumeCatalog:
    def test_lists_decoded_records_under_prefix(self) -> None:
        catalog, record_store, _ = _catalog()
        record_store.records["resume:a"] = encode_record(_record("a"))
        record_store.records["resume:b"] = encode_record(_record("b", with_feedback=True))
        record_store.records["session:x"] = "{}"

        records = asyncio.run(catalog.list_resumes())

        assert [r.id for r in records] == ["a", "b"]
        assert records[0].feedback is None
        assert records[1].feedback is not None and records[1].feedback.overall_score == 64

    def test_skips_malformed_records(self) -> None:
        catalog, record_store, _ = _catalog()
        record_store.records["resume:a"] = "not json"
        record_store.records["resume:b"] = encode_record(_record("b"))

        records = asyncio.run(catalog.list_resumes())

        assert [r.id for r in records] == ["b"]

    def test_get(self) -> None:
        catalog, record_store, _ = _catalog()
        record_store.records["resume:a"] = encode_record(_record("a"))

        assert asyncio.run(catalog.get("a")) == _record("a")
        assert asyncio.run(catalog.get("missing")) is None

    def test_get_raises_on_malformed_value(self) -> None:
        catalog, record_store, _ = _catalog()
        record_store.records["resume:a"] = "[]"

        with pytest.raises(MalformedRecordError):
            asyncio.run(catalog.get("a"))

    def test_load_preview(self) -> None:
        catalog, _, blob_store = _catalog()
        blob_store.blobs["/a/cv.png"] = b"\x89PNG"

        assert asyncio.run(catalog.load_preview(_record("a", image_path="/a/cv.png"))) == b"\x89PNG"

    def test_load_preview_without_image(self) -> None:
        catalog, _, _ = _catalog()

        assert asyncio.run(catalog.load_preview(_record("a"))) is None
        assert asyncio.run(catalog.load_preview(_record("a", image_path="/gone.png"))) is None

import asyncio

import pytest

from resumind.cleanup.coordinator import CleanupCoordinator
from resumind.cleanup.models import CleanupReport, CleanupStepResult, StepOutcome
from resumind.ingestion.models import DocumentRecord
from resumind.storage.exceptions import StoreUnavailableError
from resumind.storage.memory import InMemoryBlobStore, InMemoryRecordStore


class _UnavailableBlobStore(InMemoryBlobStore):
    """Blob store whose deletes fail for paths in ``broken``."""

    def __init__(self, broken: set[str]) -> None:
        super().__init__()
        self.broken = broken
        self.deleted: list[str] = []

    async def delete(self, path: str) -> None:
        self.deleted.append(path)
        if path in self.broken:
            raise StoreUnavailableError("blob backend timeout")
        await super().delete(path)


class _UnavailableRecordStore(InMemoryRecordStore):
    async def delete(self, key: str) -> None:
        raise StoreUnavailableError("kv offline")


def _record(resume_path: str = "/a/cv.pdf", image_path: str = "/b/cv.png") -> DocumentRecord:
    return DocumentRecord(
        id="0b7c6c8e-9f2f-4a8e-8e4e-3d1c5d1f8a11",
        resume_path=resume_path,
        image_path=image_path,
    )


def _seed(blob_store: InMemoryBlobStore, record_store: InMemoryRecordStore, record: DocumentRecord) -> None:
    if record.resume_path:
        blob_store.blobs[record.resume_path] = b"%PDF"
    if record.image_path:
        blob_store.blobs[record.image_path] = b"\x89PNG"
    record_store.records[f"resume:{record.id}"] = "{}"


class TestCleanupCoordinator:
    def test_deletes_everything(self) -> None:
        blob_store, record_store = InMemoryBlobStore(), InMemoryRecordStore()
        record = _record()
        _seed(blob_store, record_store, record)

        report = asyncio.run(CleanupCoordinator(blob_store, record_store).delete(record))

        assert [r.step for r in report.steps] == ["original", "raster", "record"]
        assert all(r.outcome is StepOutcome.SUCCEEDED for r in report.steps)
        assert report.succeeded
        assert report.record_deleted
        assert blob_store.blobs == {}
        assert record_store.records == {}

    def test_missing_blobs_are_tolerated(self) -> None:
        blob_store, record_store = InMemoryBlobStore(), InMemoryRecordStore()
        record = _record()
        record_store.records[f"resume:{record.id}"] = "{}"

        report = asyncio.run(CleanupCoordinator(blob_store, record_store).delete(record))

        assert report.outcome_of("original") is StepOutcome.NOT_FOUND_OK
        assert report.outcome_of("raster") is StepOutcome.NOT_FOUND_OK
        assert report.outcome_of("record") is StepOutcome.SUCCEEDED
        assert report.succeeded
        assert record_store.records == {}

    def test_missing_raster_still_attempts_remaining_steps(self) -> None:
        blob_store, record_store = InMemoryBlobStore(), InMemoryRecordStore()
        record = _record()
        _seed(blob_store, record_store, record)
        del blob_store.blobs[record.image_path]

        report = asyncio.run(CleanupCoordinator(blob_store, record_store).delete(record))

        assert report.outcome_of("original") is StepOutcome.SUCCEEDED
        assert report.outcome_of("raster") is StepOutcome.NOT_FOUND_OK
        assert report.record_deleted

    def test_empty_image_path_counts_as_not_found(self) -> None:
        blob_store = _UnavailableBlobStore(broken=set())
        record_store = InMemoryRecordStore()
        record = _record(image_path="")
        _seed(blob_store, record_store, record)

        report = asyncio.run(CleanupCoordinator(blob_store, record_store).delete(record))

        assert report.outcome_of("raster") is StepOutcome.NOT_FOUND_OK
        assert blob_store.deleted == [record.resume_path]
        assert report.succeeded

    def test_blob_failure_does_not_stop_record_deletion(self) -> None:
        record = _record()
        blob_store = _UnavailableBlobStore(broken={record.resume_path})
        record_store = InMemoryRecordStore()
        _seed(blob_store, record_store, record)

        report = asyncio.run(CleanupCoordinator(blob_store, record_store).delete(record))

        assert report.outcome_of("original") is StepOutcome.FAILED
        assert report.failures[0].reason == "blob backend timeout"
        assert report.outcome_of("raster") is StepOutcome.SUCCEEDED
        assert report.record_deleted
        assert not report.succeeded
        assert blob_store.deleted == [record.resume_path, record.image_path]

    def test_record_failure_is_reported(self) -> None:
        blob_store, record_store = InMemoryBlobStore(), _UnavailableRecordStore()
        record = _record()
        _seed(blob_store, record_store, record)

        report = asyncio.run(CleanupCoordinator(blob_store, record_store).delete(record))

        assert report.outcome_of("record") is StepOutcome.FAILED
        assert not report.record_deleted
        assert [r.step for r in report.failures] == ["record"]
        assert blob_store.blobs == {}

    def test_missing_record_counts_as_deleted(self) -> None:
        blob_store, record_store = InMemoryBlobStore(), InMemoryRecordStore()

        report = asyncio.run(CleanupCoordinator(blob_store, record_store).delete(_record()))

        assert report.outcome_of("record") is StepOutcome.NOT_FOUND_OK
        assert report.record_deleted

    def test_uses_configured_key_prefix(self) -> None:
        blob_store, record_store = InMemoryBlobStore(), InMemoryRecordStore()
        record = _record()
        record_store.records[f"cv:{record.id}"] = "{}"

        coordinator = CleanupCoordinator(blob_store, record_store, key_prefix="cv:")
        report = asyncio.run(coordinator.delete(record))

        assert report.outcome_of("record") is StepOutcome.SUCCEEDED
        assert record_store.records == {}


class TestCleanupReport:
    def test_unknown_step_has_no_outcome(self) -> None:
        report = CleanupReport(record_id="x")

        assert report.outcome_of("record") is None
        assert not report.record_deleted
        assert report.succeeded

    @pytest.mark.parametrize(
        ("outcome", "ok"),
        [
            (StepOutcome.SUCCEEDED, True),
            (StepOutcome.NOT_FOUND_OK, True),
            (StepOutcome.FAILED, False),
        ],
    )
    def test_step_ok(self, outcome: StepOutcome, ok: bool) -> None:
        assert CleanupStepResult("original", outcome).ok is ok

    def test_outcome_values(self) -> None:
        assert StepOutcome.NOT_FOUND_OK.value == "not_found_ok"


class TestDeleteUnreadable:
    def test_removes_only_the_record_key(self) -> None:
        blob_store, record_store = InMemoryBlobStore(), InMemoryRecordStore()
        blob_store.blobs["/a/cv.pdf"] = b"%PDF"
        record_store.records["resume:abc"] = "not json"

        report = asyncio.run(CleanupCoordinator(blob_store, record_store).delete_unreadable("abc"))

        assert [r.step for r in report.steps] == ["record"]
        assert report.record_deleted
        assert record_store.records == {}
        assert blob_store.blobs == {"/a/cv.pdf": b"%PDF"}

    def test_store_failure_is_reported(self) -> None:
        coordinator = CleanupCoordinator(InMemoryBlobStore(), _UnavailableRecordStore())

        report = asyncio.run(coordinator.delete_unreadable("abc"))

        assert report.outcome_of("record") is StepOutcome.FAILED
        assert report.failures[0].reason == "kv offline"

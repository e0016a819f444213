from collections.abc import Awaitable, Callable

from resumind.cleanup.models import CleanupReport, CleanupStepResult, StepOutcome
from resumind.ingestion.models import DocumentRecord
from resumind.ingestion.record_codec import DEFAULT_KEY_PREFIX, record_key
from resumind.logging.logger import Log
from resumind.storage.base import BaseBlobStore, BaseRecordStore
from resumind.storage.exceptions import NotFoundError, StoreError


class CleanupCoordinator:
    """Best-effort deletion of a record's original blob, thumbnail blob and record.

    Every step is attempted whatever happened to the previous ones. A missing
    resource counts as deleted.
    """

    def __init__(
        self,
        blob_store: BaseBlobStore,
        record_store: BaseRecordStore,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        self._blob_store = blob_store
        self._record_store = record_store
        self._key_prefix = key_prefix

    async def delete(self, record: DocumentRecord) -> CleanupReport:
        report = CleanupReport(record_id=record.id)
        report.steps.append(await self._delete_blob("original", record.resume_path))
        report.steps.append(await self._delete_blob("raster", record.image_path))
        key = record_key(record.id, self._key_prefix)
        report.steps.append(await self._attempt("record", key, self._record_store.delete))

        if report.succeeded:
            Log.info(f"Deleted resume {record.id}")
        else:
            failed = ", ".join(result.step for result in report.failures)
            Log.error(f"Partial cleanup of resume {record.id}: failed steps {failed}")
        return report

    async def delete_unreadable(self, record_id: str) -> CleanupReport:
        """Delete a record whose stored value cannot be decoded.

        Its blob paths are unknown, so only the record step is attempted.
        """
        report = CleanupReport(record_id=record_id)
        key = record_key(record_id, self._key_prefix)
        report.steps.append(await self._attempt("record", key, self._record_store.delete))
        if report.record_deleted:
            Log.warning(f"Deleted unreadable resume {record_id}; its blobs, if any, are left in place")
        return report

    async def _delete_blob(self, step: str, path: str) -> CleanupStepResult:
        if not path:
            Log.warning(f"No {step} blob path on record, nothing to delete")
            return CleanupStepResult(step, StepOutcome.NOT_FOUND_OK)
        return await self._attempt(step, path, self._blob_store.delete)

    @staticmethod
    async def _attempt(
        step: str,
        target: str,
        operation: Callable[[str], Awaitable[None]],
    ) -> CleanupStepResult:
        try:
            await operation(target)
        except NotFoundError:
            Log.warning(f"Cleanup step '{step}': {target} already absent")
            return CleanupStepResult(step, StepOutcome.NOT_FOUND_OK)
        except StoreError as exc:
            Log.error(f"Cleanup step '{step}' failed for {target}: {exc}")
            return CleanupStepResult(step, StepOutcome.FAILED, reason=str(exc))
        return CleanupStepResult(step, StepOutcome.SUCCEEDED)

from resumind.ingestion.exceptions import MalformedRecordError
from resumind.ingestion.models import DocumentRecord
from resumind.ingestion.record_codec import DEFAULT_KEY_PREFIX, decode_record, record_key
from resumind.logging.logger import Log
from resumind.storage.base import BaseBlobStore, BaseRecordStore
from resumind.storage.exceptions import BlobNotFoundError


class ResumeCatalog:
    """Read side of the record store: listing, lookup and preview loading."""

    def __init__(
        self,
        record_store: BaseRecordStore,
        blob_store: BaseBlobStore,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        self._record_store = record_store
        self._blob_store = blob_store
        self._key_prefix = key_prefix

    async def list_resumes(self) -> list[DocumentRecord]:
        """Return every decodable record; malformed values are logged and skipped."""
        records: list[DocumentRecord] = []
        for key, value in await self._record_store.list(self._key_prefix):
            try:
                records.append(decode_record(value))
            except MalformedRecordError as exc:
                Log.warning(f"Skipping malformed record {key}: {exc}")
        return records

    async def get(self, record_id: str) -> DocumentRecord | None:
        """Return the record with ``record_id`` or None.

        Raises:
            MalformedRecordError: if the stored value cannot be decoded.
        """
        value = await self._record_store.get(record_key(record_id, self._key_prefix))
        if value is None:
            return None
        return decode_record(value)

    async def load_preview(self, record: DocumentRecord) -> bytes | None:
        """Read the record's thumbnail bytes, or None when it has none."""
        if not record.image_path:
            Log.warning(f"Resume has no imagePath: {record.id}")
            return None
        try:
            return await self._blob_store.get(record.image_path)
        except BlobNotFoundError:
            Log.warning(f"Thumbnail missing for resume {record.id} at {record.image_path}")
            return None

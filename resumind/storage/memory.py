"""In-memory stores for local development and tests. No persistence."""

import uuid
from pathlib import PurePosixPath

from resumind.storage.base import BaseBlobStore, BaseRecordStore
from resumind.storage.exceptions import BlobNotFoundError, RecordNotFoundError


class InMemoryBlobStore(BaseBlobStore):
    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}

    async def put(self, data: bytes, name: str) -> str:
        path = f"/{uuid.uuid4().hex}/{PurePosixPath(name).name or 'blob'}"
        self.blobs[path] = data
        return path

    async def get(self, path: str) -> bytes:
        try:
            return self.blobs[path]
        except KeyError as exc:
            raise BlobNotFoundError(f"Blob not found: {path}") from exc

    async def delete(self, path: str) -> None:
        if self.blobs.pop(path, None) is None:
            raise BlobNotFoundError(f"Blob not found: {path}")


class InMemoryRecordStore(BaseRecordStore):
    def __init__(self) -> None:
        self.records: dict[str, str] = {}

    async def set(self, key: str, value: str) -> None:
        self.records[key] = value

    async def get(self, key: str) -> str | None:
        return self.records.get(key)

    async def delete(self, key: str) -> None:
        if self.records.pop(key, None) is None:
            raise RecordNotFoundError(f"Record not found: {key}")

    async def list(self, prefix: str) -> list[tuple[str, str]]:
        return sorted(
            (key, value) for key, value in self.records.items() if key.startswith(prefix)
        )

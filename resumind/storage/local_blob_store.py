import asyncio
import uuid
from pathlib import Path, PurePosixPath

from resumind.storage.base import BaseBlobStore
from resumind.storage.exceptions import BlobNotFoundError, StoreUnavailableError


def blob_file_path(root: Path, path: str) -> Path:
    """Map a blob path ``/{folder}/{name}`` onto ``{root}/{folder}/{name}``."""
    relative = PurePosixPath(path.lstrip("/"))
    if not relative.parts or ".." in relative.parts:
        raise BlobNotFoundError(f"Invalid blob path: {path}")
    return root.joinpath(*relative.parts)


class LocalBlobStore(BaseBlobStore):
    """Stores blobs as files under a root directory, one folder per upload."""

    BLOB_ROOT = Path("/app/files")

    def __init__(self, root: Path | None = None) -> None:
        self._root = root if root is not None else self.BLOB_ROOT

    async def put(self, data: bytes, name: str) -> str:
        file_name = PurePosixPath(name).name or "blob"
        path = f"/{uuid.uuid4().hex}/{file_name}"
        await asyncio.to_thread(self._write, blob_file_path(self._root, path), data)
        return path

    async def get(self, path: str) -> bytes:
        return await asyncio.to_thread(self._read, blob_file_path(self._root, path), path)

    async def delete(self, path: str) -> None:
        await asyncio.to_thread(self._remove, blob_file_path(self._root, path), path)

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StoreUnavailableError(f"Failed to write blob {target}: {exc}") from exc

    @staticmethod
    def _read(target: Path, path: str) -> bytes:
        try:
            return target.read_bytes()
        except FileNotFoundError as exc:
            raise BlobNotFoundError(f"Blob not found: {path}") from exc
        except OSError as exc:
            raise StoreUnavailableError(f"Failed to read blob {path}: {exc}") from exc

    @staticmethod
    def _remove(target: Path, path: str) -> None:
        try:
            target.unlink()
        except FileNotFoundError as exc:
            raise BlobNotFoundError(f"Blob not found: {path}") from exc
        except OSError as exc:
            raise StoreUnavailableError(f"Failed to delete blob {path}: {exc}") from exc
        try:
            target.parent.rmdir()
        except OSError:
            # Folder still holds other blobs.
            pass

from abc import ABC, abstractmethod


class BaseBlobStore(ABC):
    """Contract for stores of opaque byte payloads addressed by path."""

    @abstractmethod
    async def put(self, data: bytes, name: str) -> str:
        """Store ``data`` under a fresh location derived from ``name``.

        Returns:
            The path addressing the stored blob.

        Raises:
            StoreUnavailableError: if the blob cannot be written.
        """

    @abstractmethod
    async def get(self, path: str) -> bytes:
        """Read the blob at ``path``.

        Raises:
            BlobNotFoundError: if nothing is stored at ``path``.
            StoreUnavailableError: on any other failure.
        """

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Delete the blob at ``path``.

        Raises:
            BlobNotFoundError: if nothing is stored at ``path``.
            StoreUnavailableError: on any other failure.
        """


class BaseRecordStore(ABC):
    """Contract for key-value stores of serialized records."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Create or overwrite the value under ``key``."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the value under ``key``, or None when absent."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete ``key``.

        Raises:
            RecordNotFoundError: if ``key`` is absent.
        """

    @abstractmethod
    async def list(self, prefix: str) -> list[tuple[str, str]]:
        """Return every (key, value) pair whose key starts with ``prefix``, ordered by key."""

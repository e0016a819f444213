from pathlib import Path

from resumind.config.settings import Settings
from resumind.storage.base import BaseBlobStore, BaseRecordStore
from resumind.storage.local_blob_store import LocalBlobStore
from resumind.storage.memory import InMemoryBlobStore, InMemoryRecordStore
from resumind.storage.postgres_record_store import PostgresRecordStore


class BlobStoreFactory:
    """Creates the configured blob store."""

    BACKENDS = ("local", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseBlobStore:
        backend = settings.blob_store.lower()
        if backend == "local":
            return LocalBlobStore(root=Path(settings.blob_root))
        if backend == "memory":
            return InMemoryBlobStore()
        raise ValueError(f"Unknown blob store '{backend}'. Choose from: {list(cls.BACKENDS)}")


class RecordStoreFactory:
    """Creates the configured record store."""

    BACKENDS = ("postgres", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseRecordStore:
        backend = settings.record_store.lower()
        if backend == "postgres":
            return PostgresRecordStore()
        if backend == "memory":
            return InMemoryRecordStore()
        raise ValueError(
            f"Unknown record store '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )

import asyncio

import pytest

from resumind.storage.exceptions import BlobNotFoundError, NotFoundError, RecordNotFoundError
from resumind.storage.memory import InMemoryBlobStore, InMemoryRecordStore


class TestInMemoryBlobStore:
    def test_put_get_delete(self) -> None:
        store = InMemoryBlobStore()

        async def _scenario() -> bytes:
            path = await store.put(b"data", "cv.pdf")
            data = await store.get(path)
            await store.delete(path)
            return data

        assert asyncio.run(_scenario()) == b"data"
        assert store.blobs == {}

    def test_delete_missing_is_not_found(self) -> None:
        store = InMemoryBlobStore()
        with pytest.raises(BlobNotFoundError):
            asyncio.run(store.delete("/x/cv.pdf"))

    def test_not_found_is_distinct_store_error(self) -> None:
        assert issubclass(BlobNotFoundError, NotFoundError)
        assert issubclass(RecordNotFoundError, NotFoundError)


class TestInMemoryRecordStore:
    def test_set_overwrites(self) -> None:
        store = InMemoryRecordStore()

        async def _scenario() -> str | None:
            await store.set("resume:1", "a")
            await store.set("resume:1", "b")
            return await store.get("resume:1")

        assert asyncio.run(_scenario()) == "b"

    def test_get_missing_returns_none(self) -> None:
        assert asyncio.run(InMemoryRecordStore().get("resume:404")) is None

    def test_list_filters_by_prefix_and_sorts(self) -> None:
        store = InMemoryRecordStore()
        store.records = {"resume:b": "2", "other:a": "x", "resume:a": "1"}

        pairs = asyncio.run(store.list("resume:"))

        assert pairs == [("resume:a", "1"), ("resume:b", "2")]

    def test_delete_missing_raises_not_found(self) -> None:
        with pytest.raises(RecordNotFoundError):
            asyncio.run(InMemoryRecordStore().delete("resume:404"))

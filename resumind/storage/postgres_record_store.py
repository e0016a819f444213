import asyncio
from collections.abc import Callable
from typing import TypeVar

import psycopg

from resumind.storage.base import BaseRecordStore
from resumind.storage.connection import get_connection
from resumind.storage.exceptions import RecordNotFoundError, StoreUnavailableError

T = TypeVar("T")


def like_prefix(prefix: str) -> str:
    """Escape LIKE wildcards in ``prefix`` and append the match-all suffix."""
    escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"{escaped}%"


class PostgresRecordStore(BaseRecordStore):
    """Key-value records in the kv_records table."""

    async def set(self, key: str, value: str) -> None:
        await self._run(self._set, key, value)

    async def get(self, key: str) -> str | None:
        return await self._run(self._get, key)

    async def delete(self, key: str) -> None:
        await self._run(self._delete, key)

    @staticmethod
    async def _run(func: Callable[..., T], *args: str) -> T:
        try:
            return await asyncio.to_thread(func, *args)
        except (psycopg.Error, RuntimeError) as exc:
            raise StoreUnavailableError(f"Record store error: {exc}") from exc

    @staticmethod
    def _set(key: str, value: str) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_records (key, value)
                VALUES (%s, %s)
                ON CONFLICT (key)
                DO UPDATE SET value = EXCLUDED.value, updated_at = NOW()
                """,
                (key, value),
            )
            conn.commit()

    @staticmethod
    def _get(key: str) -> str | None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT value FROM kv_records WHERE key = %s", (key,))
                row = cur.fetchone()
        return None if row is None else str(row[0])

    @staticmethod
    def _delete(key: str) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM kv_records WHERE key = %s", (key,))
                if cur.rowcount == 0:
                    raise RecordNotFoundError(f"Record not found: {key}")
            conn.commit()

    @staticmethod
    def _list(prefix: str) -> list[tuple[str, str]]:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT key, value
                    FROM kv_records
                    WHERE key LIKE %s ESCAPE '\\'
                    ORDER BY key COLLATE "C"
                    """,
                    (like_prefix(prefix),),
                )
                rows = cur.fetchall()
        return [(str(key), str(value)) for key, value in rows]

    # Defined last: the method name shadows the builtin inside the class body.
    async def list(self, prefix: str) -> list[tuple[str, str]]:
        return await self._run(self._list, prefix)

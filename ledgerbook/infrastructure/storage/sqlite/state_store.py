"""
Key/value application state persisted as JSON text in SQLite.

Every value lives under a fixed key (``products``, ``documents``,
``invoice-counter``, ``estimate-counter``). A missing key reads as its
default; a value that is not valid JSON, or does not have the expected
shape, also reads as the default and is logged rather than raised.
"""

import json
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import aiosqlite
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ledgerbook.config import get_logger
from ledgerbook.core.exceptions import DatabaseError
from ledgerbook.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)

PRODUCTS_KEY = "products"
DOCUMENTS_KEY = "documents"
INVOICE_COUNTER_KEY = "invoice-counter"
ESTIMATE_COUNTER_KEY = "estimate-counter"

T = TypeVar("T")

_MISSING = object()


def encode(value: Any) -> str:
    """Serialize a value the same way every time."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def dump_records(records: Sequence[BaseModel]) -> list[dict[str, Any]]:
    """Convert entities to their stored (camelCase) JSON form."""
    return [record.model_dump(mode="json", by_alias=True) for record in records]


def coerce(key: str, raw: Any, adapter: TypeAdapter[T], default: T) -> T:
    """Validate a decoded value; fall back to *default* when it has the wrong shape."""
    if raw is _MISSING or raw is None:
        return default
    try:
        return adapter.validate_python(raw)
    except PydanticValidationError as e:
        logger.warning(
            "state_value_invalid",
            key=key,
            errors=e.error_count(),
        )
        return default


class StateTransaction:
    """Reads and writes state keys on one connection inside a transaction."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def read(self, key: str, adapter: TypeAdapter[T], default: T) -> T:
        raw = await _read_raw(self._conn, key)
        return coerce(key, raw, adapter, default)

    async def write(self, key: str, value: Any) -> None:
        try:
            await self._conn.execute(
                """
                INSERT INTO app_state (key, value, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, encode(value)),
            )
        except aiosqlite.Error as e:
            raise DatabaseError(f"write {key}", str(e)) from e


async def _read_raw(conn: aiosqlite.Connection, key: str) -> Any:
    try:
        cursor = await conn.execute("SELECT value FROM app_state WHERE key = ?", (key,))
        row = await cursor.fetchone()
    except aiosqlite.Error as e:
        raise DatabaseError(f"read {key}", str(e)) from e
    if row is None:
        return _MISSING
    try:
        return json.loads(row["value"])
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("state_value_corrupt", key=key, error=str(e))
        return _MISSING


class SQLiteStateStore:
    """SQLite-backed replacement for the browser's local storage."""

    async def load(self, key: str, adapter: TypeAdapter[T], default: T) -> T:
        """Read and validate one key."""
        async with get_connection() as conn:
            raw = await _read_raw(conn, key)
        return coerce(key, raw, adapter, default)

    async def load_raw(self, key: str) -> Any | None:
        """Read one key as plain decoded JSON, or None when absent or corrupt."""
        async with get_connection() as conn:
            raw = await _read_raw(conn, key)
        return None if raw is _MISSING else raw

    async def save(self, entries: dict[str, Any]) -> None:
        """Write several keys in a single transaction."""
        async with self.mutation() as tx:
            for key, value in entries.items():
                await tx.write(key, value)
        logger.debug("state_saved", keys=sorted(entries))

    @asynccontextmanager
    async def mutation(self) -> AsyncIterator[StateTransaction]:
        """Serialized read-modify-write; commits on exit, rolls back on error."""
        async with get_transaction() as conn:
            yield StateTransaction(conn)

"""Unit tests for SQLite connection pool."""

import asyncio
from pathlib import Path
from unittest.mock import patch

import aiosqlite
import pytest

import ledgerbook.infrastructure.storage.sqlite.connection as conn_module
from ledgerbook.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)


class TestConnectionPoolInit:
    """Tests for ConnectionPool initialization."""

    def test_defaults(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)
        assert pool.db_path == temp_db_path
        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool._initialized is False

    async def test_initialize_creates_directory(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "dir" / "test.db"
        pool = ConnectionPool(db_path, pool_size=1)
        try:
            await pool.initialize()
            assert db_path.parent.exists()
        finally:
            await pool.close()

    async def test_initialize_creates_state_table(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.acquire() as conn:
                cursor = await conn.execute(
                    "SELECT name FROM sqlite_master WHERE type='table' AND name='app_state'"
                )
                assert await cursor.fetchone() is not None
        finally:
            await pool.close()

    async def test_initialize_idempotent(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=2)
        try:
            await pool.initialize()
            await pool.initialize()
            assert len(pool._connections) == 2
        finally:
            await pool.close()

    async def test_wal_mode(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.acquire() as conn:
                cursor = await conn.execute("PRAGMA journal_mode")
                row = await cursor.fetchone()
                assert row[0] == "wal"
        finally:
            await pool.close()


class TestTransactions:
    async def test_transaction_commits_on_success(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.transaction() as conn:
                await conn.execute(
                    "INSERT INTO app_state (key, value) VALUES ('k', '1')"
                )
            async with aiosqlite.connect(temp_db_path) as check:
                cursor = await check.execute("SELECT value FROM app_state WHERE key='k'")
                assert (await cursor.fetchone())[0] == "1"
        finally:
            await pool.close()

    async def test_transaction_rolls_back_on_exception(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            with pytest.raises(RuntimeError):
                async with pool.transaction() as conn:
                    await conn.execute(
                        "INSERT INTO app_state (key, value) VALUES ('k', '1')"
                    )
                    raise RuntimeError("abort")
            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM app_state")
                assert (await cursor.fetchone())[0] == 0
        finally:
            await pool.close()

    async def test_exclusive_transactions_do_not_overlap(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=2)
        active = 0
        peak = 0

        async def writer():
            nonlocal active, peak
            async with pool.exclusive_transaction():
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0.01)
                active -= 1

        try:
            await asyncio.gather(writer(), writer(), writer())
            assert peak == 1
        finally:
            await pool.close()


class TestGlobalPool:
    async def test_get_pool_returns_same_instance(self, mock_settings):
        conn_module._pool = None
        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            try:
                first = await get_pool()
                assert await get_pool() is first
            finally:
                await close_pool()
        assert conn_module._pool is None

    async def test_close_pool_safe_when_none(self):
        conn_module._pool = None
        await close_pool()
        assert conn_module._pool is None

    async def test_get_connection_and_transaction(self, state_db: Path):
        async with get_transaction() as conn:
            await conn.execute("INSERT INTO app_state (key, value) VALUES ('k', '\"v\"')")
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT value FROM app_state WHERE key='k'")
            row = await cursor.fetchone()
            assert row["value"] == '"v"'

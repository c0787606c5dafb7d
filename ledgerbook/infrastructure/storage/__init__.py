"""Storage infrastructure implementations."""

from ledgerbook.infrastructure.storage.sqlite import (
    SQLiteDocumentStore,
    SQLiteInventoryStore,
    SQLiteLedgerStore,
    SQLiteStateStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteStateStore",
    "SQLiteInventoryStore",
    "SQLiteDocumentStore",
    "SQLiteLedgerStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]

"""SQLite storage implementations."""

from ledgerbook.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from ledgerbook.infrastructure.storage.sqlite.document_store import SQLiteDocumentStore
from ledgerbook.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from ledgerbook.infrastructure.storage.sqlite.ledger_store import SQLiteLedgerStore
from ledgerbook.infrastructure.storage.sqlite.state_store import SQLiteStateStore

# Aliases used by the API lifespan
get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instances
_state_store: SQLiteStateStore | None = None
_inventory_store: SQLiteInventoryStore | None = None
_document_store: SQLiteDocumentStore | None = None
_ledger_store: SQLiteLedgerStore | None = None


def _get_state_store() -> SQLiteStateStore:
    global _state_store
    if _state_store is None:
        _state_store = SQLiteStateStore()
    return _state_store


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore(_get_state_store())
    return _inventory_store


async def get_document_store() -> SQLiteDocumentStore:
    """Get singleton document store instance."""
    global _document_store
    if _document_store is None:
        _document_store = SQLiteDocumentStore(_get_state_store())
    return _document_store


async def get_ledger_store() -> SQLiteLedgerStore:
    """Get singleton ledger store instance."""
    global _ledger_store
    if _ledger_store is None:
        _ledger_store = SQLiteLedgerStore(_get_state_store())
    return _ledger_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "get_connection_pool",
    "close_connection_pool",
    # Store classes
    "SQLiteStateStore",
    "SQLiteInventoryStore",
    "SQLiteDocumentStore",
    "SQLiteLedgerStore",
    # Factory functions
    "get_inventory_store",
    "get_document_store",
    "get_ledger_store",
]

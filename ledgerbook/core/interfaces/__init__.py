"""Core interfaces (ports) for dependency injection."""

from ledgerbook.core.interfaces.document_store import IDocumentStore
from ledgerbook.core.interfaces.inventory_store import IInventoryStore
from ledgerbook.core.interfaces.ledger_store import ILedgerStore

__all__ = [
    "IInventoryStore",
    "IDocumentStore",
    "ILedgerStore",
]

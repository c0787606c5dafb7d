"""Core domain entities."""

from ledgerbook.core.entities.document import (
    Counters,
    Document,
    DocumentType,
    Draft,
    FinalizedDocument,
    LineItem,
    Totals,
)
from ledgerbook.core.entities.product import Product, ProductData

__all__ = [
    # Inventory entities
    "Product",
    "ProductData",
    # Document entities
    "Document",
    "DocumentType",
    "Draft",
    "FinalizedDocument",
    "LineItem",
    "Totals",
    "Counters",
]

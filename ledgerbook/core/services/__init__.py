"""
Core business logic services.

Layer-pure code that depends only on:
- ledgerbook/core/entities/*
- ledgerbook/core/exceptions.py

NO infrastructure imports.
"""

from ledgerbook.core.services.ledger import (
    DEFAULT_RULES,
    GST_RATE,
    LedgerRules,
    LineItemOutcome,
    LineItemResult,
    add_line_item,
    allocate_number,
    apply_stock_decrement,
    compute_totals,
    finalize_document,
    format_number,
    new_id,
    remove_line_item,
    validate_draft,
)

__all__ = [
    "GST_RATE",
    "DEFAULT_RULES",
    "LedgerRules",
    "LineItemOutcome",
    "LineItemResult",
    "add_line_item",
    "remove_line_item",
    "compute_totals",
    "format_number",
    "allocate_number",
    "apply_stock_decrement",
    "validate_draft",
    "finalize_document",
    "new_id",
]

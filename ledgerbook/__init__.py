"""Ledgerbook: inventory and invoice/estimate ledger service."""

__version__ = "1.0.0"

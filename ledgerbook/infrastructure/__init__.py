"""Infrastructure layer implementations."""

from ledgerbook.infrastructure import pdf, storage

__all__ = ["storage", "pdf"]

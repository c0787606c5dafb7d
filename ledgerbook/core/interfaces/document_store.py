"""Abstract interface for finalized document storage."""

from abc import ABC, abstractmethod

from ledgerbook.core.entities.document import Document, DocumentType


class IDocumentStore(ABC):
    """Interface for document persistence.

    Documents are historical records: there is no update or delete.
    """

    @abstractmethod
    async def save(self, document: Document) -> Document:
        """Prepend a document so the newest comes first."""
        pass

    @abstractmethod
    async def find_by_id(self, document_id: str) -> Document | None:
        """Get document by id."""
        pass

    @abstractmethod
    async def list_documents(
        self, doc_type: DocumentType | None = None
    ) -> list[Document]:
        """List documents most recent first, optionally of one type."""
        pass

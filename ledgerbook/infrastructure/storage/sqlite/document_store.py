"""SQLite implementation of finalized document storage."""

from pydantic import TypeAdapter

from ledgerbook.config import get_logger
from ledgerbook.core.entities.document import Document, DocumentType
from ledgerbook.core.interfaces.document_store import IDocumentStore
from ledgerbook.infrastructure.storage.sqlite.state_store import (
    DOCUMENTS_KEY,
    SQLiteStateStore,
    dump_records,
)

logger = get_logger(__name__)

DOCUMENT_LIST = TypeAdapter(list[Document])


class SQLiteDocumentStore(IDocumentStore):
    """Documents kept newest-first as the JSON array under ``documents``."""

    def __init__(self, state: SQLiteStateStore | None = None):
        self._state = state or SQLiteStateStore()

    async def save(self, document: Document) -> Document:
        """Prepend a document."""
        async with self._state.mutation() as tx:
            documents = await tx.read(DOCUMENTS_KEY, DOCUMENT_LIST, [])
            await tx.write(DOCUMENTS_KEY, dump_records([document, *documents]))
        logger.info(
            "document_saved",
            document_id=document.id,
            number=document.number,
        )
        return document

    async def find_by_id(self, document_id: str) -> Document | None:
        """Get document by id."""
        for document in await self.list_documents():
            if document.id == document_id:
                return document
        return None

    async def list_documents(
        self, doc_type: DocumentType | None = None
    ) -> list[Document]:
        """List documents most recent first."""
        documents = await self._state.load(DOCUMENTS_KEY, DOCUMENT_LIST, [])
        if doc_type is None:
            return documents
        return [d for d in documents if d.type is doc_type]

"""
Generate Document PDF Use Case.

Exports a saved invoice or estimate as a PDF named after its number.
"""

from dataclasses import dataclass

from ledgerbook.config import get_logger
from ledgerbook.core.exceptions import DocumentNotFoundError
from ledgerbook.core.interfaces.document_store import IDocumentStore
from ledgerbook.infrastructure.pdf.document_pdf_renderer import (
    Fpdf2DocumentRenderer,
    IDocumentPdfRenderer,
)

logger = get_logger(__name__)


@dataclass
class DocumentPdfResult:
    """Result of document PDF generation."""

    pdf_bytes: bytes
    document_id: str
    file_name: str
    file_size: int


class GenerateDocumentPdfUseCase:
    """
    Use case for exporting documents as PDF.

    Flow:
    1. Load document from store
    2. Render PDF via DocumentPdfRenderer
    3. Return PDF bytes and metadata
    """

    def __init__(
        self,
        document_store: IDocumentStore | None = None,
        renderer: IDocumentPdfRenderer | None = None,
    ):
        self._document_store = document_store
        self._renderer = renderer or Fpdf2DocumentRenderer()

    async def _get_document_store(self) -> IDocumentStore:
        if self._document_store is None:
            from ledgerbook.infrastructure.storage.sqlite import get_document_store

            self._document_store = await get_document_store()
        return self._document_store

    async def execute(self, document_id: str) -> DocumentPdfResult:
        """
        Generate a document PDF.

        Args:
            document_id: The document ID.

        Returns:
            DocumentPdfResult with PDF bytes and metadata.

        Raises:
            DocumentNotFoundError: If the document is not found.
            RenderError: If the PDF could not be produced.
        """
        logger.info("generate_document_pdf_started", document_id=document_id)

        store = await self._get_document_store()
        document = await store.find_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)

        pdf_bytes = self._renderer.render(document)
        file_name = f"{document.number}.pdf"

        logger.info(
            "generate_document_pdf_complete",
            document_id=document_id,
            file_size=len(pdf_bytes),
        )

        return DocumentPdfResult(
            pdf_bytes=pdf_bytes,
            document_id=document_id,
            file_name=file_name,
            file_size=len(pdf_bytes),
        )

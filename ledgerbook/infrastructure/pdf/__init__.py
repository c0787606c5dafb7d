"""PDF generation infrastructure."""

from ledgerbook.infrastructure.pdf.document_pdf_renderer import (
    Fpdf2DocumentRenderer,
    IDocumentPdfRenderer,
)

__all__ = [
    "Fpdf2DocumentRenderer",
    "IDocumentPdfRenderer",
]

"""Application use cases."""

from ledgerbook.application.use_cases.draft_session import (
    DraftSession,
    get_draft_session,
    reset_draft_session,
)
from ledgerbook.application.use_cases.finalize_document import (
    FinalizeDocumentResult,
    FinalizeDocumentUseCase,
)
from ledgerbook.application.use_cases.generate_document_pdf import (
    DocumentPdfResult,
    GenerateDocumentPdfUseCase,
)
from ledgerbook.application.use_cases.manage_products import (
    AddProductUseCase,
    DeleteProductUseCase,
    UpdateProductUseCase,
)

__all__ = [
    "AddProductUseCase",
    "UpdateProductUseCase",
    "DeleteProductUseCase",
    "DraftSession",
    "get_draft_session",
    "reset_draft_session",
    "FinalizeDocumentUseCase",
    "FinalizeDocumentResult",
    "GenerateDocumentPdfUseCase",
    "DocumentPdfResult",
]

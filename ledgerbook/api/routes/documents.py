"""Invoice and estimate endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from ledgerbook.api.dependencies import (
    get_doc_store,
    get_document_pdf_use_case,
    get_finalize_document_use_case,
)
from ledgerbook.application.dto.requests import CreateDocumentRequest
from ledgerbook.application.dto.responses import (
    CreateDocumentResponse,
    DocumentListResponse,
    DocumentResponse,
    ErrorResponse,
    document_response,
)
from ledgerbook.application.use_cases import (
    FinalizeDocumentUseCase,
    GenerateDocumentPdfUseCase,
)
from ledgerbook.core.entities.document import DocumentType
from ledgerbook.infrastructure.storage.sqlite import SQLiteDocumentStore

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.post(
    "",
    response_model=CreateDocumentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_document(
    request: CreateDocumentRequest,
    use_case: FinalizeDocumentUseCase = Depends(get_finalize_document_use_case),
) -> CreateDocumentResponse:
    """Create an invoice or estimate directly from a client and item list."""
    result = await use_case.create(request)
    return use_case.to_response(result)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    type: DocumentType | None = None,
    store: SQLiteDocumentStore = Depends(get_doc_store),
) -> DocumentListResponse:
    """List documents, most recent first, optionally only one type."""
    documents = await store.list_documents(type)
    return DocumentListResponse(
        documents=[document_response(d) for d in documents],
        total=len(documents),
    )


@router.get(
    "/{document_id}",
    response_model=DocumentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_document(
    document_id: str,
    store: SQLiteDocumentStore = Depends(get_doc_store),
) -> DocumentResponse:
    """Get a document by ID."""
    document = await store.find_by_id(document_id)
    if document is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Document not found: {document_id}",
        )
    return document_response(document)


@router.get(
    "/{document_id}/pdf",
    responses={
        404: {"model": ErrorResponse, "description": "Document not found"},
    },
)
async def get_document_pdf(
    document_id: str,
    use_case: GenerateDocumentPdfUseCase = Depends(get_document_pdf_use_case),
) -> Response:
    """Generate and download a PDF named after the document number."""
    result = await use_case.execute(document_id)

    return Response(
        content=result.pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{result.file_name}"',
        },
    )

"""Draft composition endpoints.

The draft is the single document being composed in this process. It is
kept in memory and cleared after a successful save.
"""

from fastapi import APIRouter, Depends, status

from ledgerbook.api.dependencies import (
    get_finalize_document_use_case,
    get_product_store,
    get_session,
)
from ledgerbook.application.dto.requests import (
    AddLineItemRequest,
    SaveDraftRequest,
    SetClientRequest,
)
from ledgerbook.application.dto.responses import (
    CreateDocumentResponse,
    DraftResponse,
    ErrorResponse,
    LineItemResultResponse,
    draft_response,
    line_item_result_response,
)
from ledgerbook.application.use_cases import DraftSession, FinalizeDocumentUseCase
from ledgerbook.infrastructure.storage.sqlite import SQLiteInventoryStore

router = APIRouter(prefix="/api/draft", tags=["draft"])


def _current(session: DraftSession) -> DraftResponse:
    return draft_response(session.draft, session.totals)


@router.get("", response_model=DraftResponse)
async def get_draft(
    session: DraftSession = Depends(get_session),
) -> DraftResponse:
    """Get the draft with its running totals."""
    return _current(session)


@router.put("/client", response_model=DraftResponse)
async def set_client(
    request: SetClientRequest,
    session: DraftSession = Depends(get_session),
) -> DraftResponse:
    """Set the bill-to name and address."""
    session.set_client(request.client_name, request.client_address)
    return _current(session)


@router.post("/items", response_model=LineItemResultResponse)
async def add_item(
    request: AddLineItemRequest,
    session: DraftSession = Depends(get_session),
    store: SQLiteInventoryStore = Depends(get_product_store),
) -> LineItemResultResponse:
    """Add a product to the draft.

    Adding a product already in the draft increases its quantity. Unknown
    products and non-positive quantities leave the draft unchanged and are
    reported in ``outcome``.
    """
    products = await store.list_products()
    result = session.add_item(products, request.product_id, request.quantity)
    return line_item_result_response(result, _current(session))


@router.delete("/items/{product_id}", response_model=DraftResponse)
async def remove_item(
    product_id: str,
    session: DraftSession = Depends(get_session),
) -> DraftResponse:
    """Remove a product's line from the draft."""
    session.remove_item(product_id)
    return _current(session)


@router.delete("", response_model=DraftResponse)
async def clear_draft(
    session: DraftSession = Depends(get_session),
) -> DraftResponse:
    """Discard the draft."""
    session.clear()
    return _current(session)


@router.post(
    "/save",
    response_model=CreateDocumentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def save_draft(
    request: SaveDraftRequest,
    session: DraftSession = Depends(get_session),
    use_case: FinalizeDocumentUseCase = Depends(get_finalize_document_use_case),
) -> CreateDocumentResponse:
    """Save the draft as an invoice or estimate and start a new draft."""
    result = await use_case.save_draft(session, request.type)
    return use_case.to_response(result)

"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from ledgerbook.core.entities.document import Document, Draft, LineItem, Totals
from ledgerbook.core.entities.product import Product
from ledgerbook.core.services.ledger import LineItemResult


class ProductResponse(BaseModel):
    """Inventory product."""

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    price: float = Field(..., description="Unit price")
    stock: int = Field(..., description="Units on hand (may be negative)")
    available: bool = Field(..., description="True when stock is above zero")


class ProductListResponse(BaseModel):
    """List of products."""

    products: list[ProductResponse]
    total: int


class LineItemResponse(BaseModel):
    """Line item snapshot."""

    product_id: str = Field(..., description="Source product ID")
    name: str = Field(..., description="Product name at the time it was added")
    price: float = Field(..., description="Unit price at the time it was added")
    quantity: int = Field(..., description="Units")
    line_total: float = Field(..., description="price x quantity")


class TotalsResponse(BaseModel):
    """Subtotal, GST and grand total."""

    subtotal: float
    gst_amount: float
    total: float


class DraftResponse(BaseModel):
    """Document being composed, with its running totals."""

    client_name: str
    client_address: str
    line_items: list[LineItemResponse] = Field(default=[])
    totals: TotalsResponse


class LineItemResultResponse(BaseModel):
    """Outcome of adding a product to the draft."""

    outcome: str = Field(
        ...,
        description="added, merged, skipped_unknown_product or skipped_invalid_quantity",
    )
    item: LineItemResponse | None = Field(default=None, description="Resulting line")
    exceeds_stock: bool = Field(
        default=False, description="Line quantity is above the product's stock"
    )
    draft: DraftResponse | None = Field(
        default=None, description="Draft after the change, when one was edited"
    )


class DocumentResponse(BaseModel):
    """Finalized invoice or estimate."""

    id: str = Field(..., description="Document ID")
    type: str = Field(..., description="Invoice or Estimate")
    number: str = Field(..., description="Document number, e.g. INV-0001")
    client_name: str
    client_address: str = ""
    date: date
    items: list[LineItemResponse] = Field(default=[])
    subtotal: float
    gst_amount: float
    total: float


class DocumentListResponse(BaseModel):
    """List of documents, most recent first."""

    documents: list[DocumentResponse]
    total: int


class CreateDocumentResponse(BaseModel):
    """A freshly finalized document."""

    document: DocumentResponse
    stock_updated: bool = Field(..., description="True when inventory was decremented")
    skipped_items: list[LineItemResultResponse] = Field(
        default=[], description="Requested items that did not become lines"
    )


class WorkspaceSnapshot(BaseModel):
    """Everything a client needs to re-render after a command."""

    products: list[ProductResponse]
    available_products: list[ProductResponse]
    documents: list[DocumentResponse]
    draft: DraftResponse
    selected_document: DocumentResponse | None = None
    notice: str | None = Field(default=None, description="Message to show the user")


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. DOCUMENT_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


# Entity -> DTO conversion shared by routes, use cases and the dispatcher


def product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        price=product.price,
        stock=product.stock,
        available=product.available,
    )


def line_item_response(item: LineItem) -> LineItemResponse:
    return LineItemResponse(
        product_id=item.product_id,
        name=item.name,
        price=item.price,
        quantity=item.quantity,
        line_total=item.line_total,
    )


def document_response(document: Document) -> DocumentResponse:
    return DocumentResponse(
        id=document.id,
        type=document.type.value,
        number=document.number,
        client_name=document.client_name,
        client_address=document.client_address,
        date=document.date,
        items=[line_item_response(item) for item in document.items],
        subtotal=document.subtotal,
        gst_amount=document.gst_amount,
        total=document.total,
    )


def draft_response(draft: Draft, totals: Totals) -> DraftResponse:
    return DraftResponse(
        client_name=draft.client_name,
        client_address=draft.client_address,
        line_items=[line_item_response(item) for item in draft.line_items],
        totals=TotalsResponse(
            subtotal=totals.subtotal,
            gst_amount=totals.gst_amount,
            total=totals.total,
        ),
    )


def line_item_result_response(
    result: LineItemResult, draft: DraftResponse | None = None
) -> LineItemResultResponse:
    return LineItemResultResponse(
        outcome=result.outcome.value,
        item=line_item_response(result.item) if result.item else None,
        exceeds_stock=result.exceeds_stock,
        draft=draft,
    )

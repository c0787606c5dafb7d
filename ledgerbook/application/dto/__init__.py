"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from ledgerbook.application.dto.requests import (
    AddLineItemRequest,
    CreateDocumentRequest,
    CreateProductRequest,
    DocumentItemRequest,
    SaveDraftRequest,
    SetClientRequest,
    UpdateProductRequest,
)
from ledgerbook.application.dto.responses import (
    CreateDocumentResponse,
    DocumentListResponse,
    DocumentResponse,
    DraftResponse,
    ErrorResponse,
    HealthResponse,
    LineItemResponse,
    LineItemResultResponse,
    ProductListResponse,
    ProductResponse,
    ProviderHealthResponse,
    TotalsResponse,
    WorkspaceSnapshot,
)

__all__ = [
    # Requests
    "AddLineItemRequest",
    "CreateDocumentRequest",
    "CreateProductRequest",
    "DocumentItemRequest",
    "SaveDraftRequest",
    "SetClientRequest",
    "UpdateProductRequest",
    # Responses
    "CreateDocumentResponse",
    "DocumentListResponse",
    "DocumentResponse",
    "DraftResponse",
    "ErrorResponse",
    "HealthResponse",
    "LineItemResponse",
    "LineItemResultResponse",
    "ProductListResponse",
    "ProductResponse",
    "ProviderHealthResponse",
    "TotalsResponse",
    "WorkspaceSnapshot",
]

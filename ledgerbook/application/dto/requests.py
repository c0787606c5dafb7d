"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from pydantic import BaseModel, Field

from ledgerbook.core.entities.document import DocumentType
from ledgerbook.core.entities.product import ProductData


class CreateProductRequest(BaseModel):
    """Request to add a product to the inventory."""

    name: str = Field(..., min_length=1, description="Product name", examples=["Steel Pipe"])
    price: float = Field(..., ge=0, description="Unit price", examples=[250.0])
    stock: int = Field(..., ge=0, description="Units on hand", examples=[40])

    def to_product_data(self) -> ProductData:
        return ProductData(name=self.name, price=self.price, stock=self.stock)


class UpdateProductRequest(CreateProductRequest):
    """Request to replace a product's name, price and stock."""


class SetClientRequest(BaseModel):
    """Client details for the draft being composed."""

    client_name: str = Field(default="", description="Bill-to name")
    client_address: str = Field(default="", description="Bill-to address")


class AddLineItemRequest(BaseModel):
    """Request to add a product to the draft.

    Quantity is not constrained here: a non-positive quantity is reported
    back as a skipped line instead of a validation failure.
    """

    product_id: str = Field(..., description="Inventory product ID")
    quantity: int = Field(default=1, description="Units to add")


class SaveDraftRequest(BaseModel):
    """Request to finalize the current draft."""

    type: DocumentType = Field(..., description="Invoice or Estimate")


class DocumentItemRequest(BaseModel):
    """Product and quantity for a one-shot document."""

    product_id: str = Field(..., description="Inventory product ID")
    quantity: int = Field(default=1, description="Units")


class CreateDocumentRequest(BaseModel):
    """Request to create a document without going through the draft.

    Items are applied in order exactly as if they were added to a draft,
    so repeated products are merged and unknown products are skipped.
    """

    type: DocumentType = Field(..., description="Invoice or Estimate")
    client_name: str = Field(default="", description="Bill-to name")
    client_address: str = Field(default="", description="Bill-to address")
    items: list[DocumentItemRequest] = Field(default_factory=list)

"""Invoice and estimate domain entities."""

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ledgerbook.core.entities.product import Product


class DocumentType(str, Enum):
    """Kinds of documents the ledger can issue."""

    INVOICE = "Invoice"
    ESTIMATE = "Estimate"


class LineItem(BaseModel):
    """Snapshot of a product's name and price plus a requested quantity.

    Decoupled from the live product so later edits or deletes never change
    a saved document.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    product_id: str
    name: str
    price: float
    quantity: int = Field(ge=1)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class Totals(BaseModel):
    """Subtotal, GST and grand total of a set of line items."""

    model_config = ConfigDict(frozen=True)

    subtotal: float = 0.0
    gst_amount: float = 0.0
    total: float = 0.0


class Document(BaseModel):
    """A finalized invoice or estimate.

    Frozen financial record: totals are computed once at creation and are
    never recomputed.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str
    type: DocumentType
    number: str
    client_name: str
    client_address: str = ""
    date: datetime.date
    items: list[LineItem] = Field(default_factory=list)
    subtotal: float
    gst_amount: float
    total: float


class Draft(BaseModel):
    """In-progress document being composed; never persisted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    client_name: str = ""
    client_address: str = ""
    line_items: list[LineItem] = Field(default_factory=list)


class Counters(BaseModel):
    """Next number to hand out for each document type."""

    model_config = ConfigDict(frozen=True)

    invoice: int = 1
    estimate: int = 1

    def for_type(self, doc_type: DocumentType) -> int:
        if doc_type is DocumentType.INVOICE:
            return self.invoice
        return self.estimate

    def advance(self, doc_type: DocumentType) -> "Counters":
        """Return a copy with the counter for *doc_type* incremented."""
        if doc_type is DocumentType.INVOICE:
            return self.model_copy(update={"invoice": self.invoice + 1})
        return self.model_copy(update={"estimate": self.estimate + 1})


class FinalizedDocument(BaseModel):
    """Outcome of finalizing a draft, applied to storage as one unit."""

    model_config = ConfigDict(frozen=True)

    document: Document
    products: list[Product]
    counters: Counters

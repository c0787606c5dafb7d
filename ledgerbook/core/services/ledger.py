"""
Ledger engine.

Layer-pure functions over drafts, inventory snapshots and counters:
line-item aggregation, tax computation, document number allocation and
stock decrement. NO infrastructure imports and no I/O; callers persist the
results.
"""

import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from ledgerbook.core.entities.document import (
    Counters,
    Document,
    DocumentType,
    Draft,
    FinalizedDocument,
    LineItem,
    Totals,
)
from ledgerbook.core.entities.product import Product
from ledgerbook.core.exceptions import DraftValidationError

GST_RATE = 0.18


@dataclass(frozen=True)
class LedgerRules:
    """Tax rate and numbering format applied when finalizing."""

    gst_rate: float = GST_RATE
    invoice_prefix: str = "INV"
    estimate_prefix: str = "EST"
    number_width: int = 4

    def prefix_for(self, doc_type: DocumentType) -> str:
        if doc_type is DocumentType.INVOICE:
            return self.invoice_prefix
        return self.estimate_prefix


DEFAULT_RULES = LedgerRules()


class LineItemOutcome(str, Enum):
    """What add_line_item did to the draft."""

    ADDED = "added"
    MERGED = "merged"
    SKIPPED_UNKNOWN_PRODUCT = "skipped_unknown_product"
    SKIPPED_INVALID_QUANTITY = "skipped_invalid_quantity"


@dataclass(frozen=True)
class LineItemResult:
    """Result of adding a product to a draft."""

    outcome: LineItemOutcome
    item: LineItem | None = None
    exceeds_stock: bool = False

    @property
    def skipped(self) -> bool:
        return self.item is None


def new_id(prefix: str) -> str:
    """Generate an opaque record id such as ``prod_1a2b3c4d5e6f``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _find_product(products: Iterable[Product], product_id: str) -> Product | None:
    for product in products:
        if product.id == product_id:
            return product
    return None


def add_line_item(
    draft: Draft,
    products: Iterable[Product],
    product_id: str,
    quantity: int,
) -> LineItemResult:
    """Add *quantity* of a product to *draft*.

    An existing line for the same product has its quantity increased instead
    of gaining a second entry. Stock is not enforced: the result only flags
    when the line's quantity is above what is on hand.
    """
    product = _find_product(products, product_id)
    if product is None:
        return LineItemResult(LineItemOutcome.SKIPPED_UNKNOWN_PRODUCT)
    if quantity <= 0:
        return LineItemResult(LineItemOutcome.SKIPPED_INVALID_QUANTITY)

    for index, existing in enumerate(draft.line_items):
        if existing.product_id == product_id:
            merged = existing.model_copy(
                update={"quantity": existing.quantity + quantity}
            )
            draft.line_items[index] = merged
            return LineItemResult(
                LineItemOutcome.MERGED,
                item=merged,
                exceeds_stock=merged.quantity > product.stock,
            )

    item = LineItem(
        product_id=product.id,
        name=product.name,
        price=product.price,
        quantity=quantity,
    )
    draft.line_items.append(item)
    return LineItemResult(
        LineItemOutcome.ADDED,
        item=item,
        exceeds_stock=quantity > product.stock,
    )


def remove_line_item(draft: Draft, product_id: str) -> bool:
    """Drop the line for *product_id*; False when there was none."""
    remaining = [i for i in draft.line_items if i.product_id != product_id]
    removed = len(remaining) != len(draft.line_items)
    draft.line_items = remaining
    return removed


def compute_totals(items: Iterable[LineItem], gst_rate: float = GST_RATE) -> Totals:
    """Subtotal of price x quantity, GST on the subtotal, and their sum.

    Plain float arithmetic; rounding is left to display.
    """
    subtotal = sum((item.price * item.quantity for item in items), 0.0)
    gst_amount = subtotal * gst_rate
    return Totals(subtotal=subtotal, gst_amount=gst_amount, total=subtotal + gst_amount)


def format_number(
    doc_type: DocumentType, counter: int, rules: LedgerRules = DEFAULT_RULES
) -> str:
    """Render e.g. ``INV-0007``."""
    return f"{rules.prefix_for(doc_type)}-{counter:0{rules.number_width}d}"


def allocate_number(
    doc_type: DocumentType,
    counters: Counters,
    rules: LedgerRules = DEFAULT_RULES,
) -> tuple[str, Counters]:
    """Format the next number for *doc_type* and return it with advanced counters.

    The input counters are left untouched; the other type's counter never moves.
    """
    number = format_number(doc_type, counters.for_type(doc_type), rules)
    return number, counters.advance(doc_type)


def apply_stock_decrement(
    products: Iterable[Product], items: Iterable[LineItem]
) -> list[Product]:
    """Return copies of *products* with each line's quantity taken off stock.

    Lines whose product no longer exists are ignored. Stock may go negative.
    """
    taken: dict[str, int] = {}
    for item in items:
        taken[item.product_id] = taken.get(item.product_id, 0) + item.quantity

    return [
        product.model_copy(update={"stock": product.stock - taken[product.id]})
        if product.id in taken
        else product.model_copy()
        for product in products
    ]


def validate_draft(draft: Draft) -> None:
    """Raise DraftValidationError unless the draft can become a document."""
    problems: dict[str, str] = {}
    if not draft.client_name:
        problems["client_name"] = "Client name is required"
    if not draft.line_items:
        problems["line_items"] = "At least one line item is required"
    if problems:
        raise DraftValidationError(problems)


def finalize_document(
    draft: Draft,
    doc_type: DocumentType,
    counters: Counters,
    products: Iterable[Product],
    *,
    rules: LedgerRules = DEFAULT_RULES,
    today: Callable[[], date] = date.today,
    id_factory: Callable[[str], str] = new_id,
) -> FinalizedDocument:
    """Turn a draft into a frozen document plus the state it implies.

    Validation happens before anything is computed, so a rejected draft
    yields no number and no stock change. Only invoices touch stock.
    None of the inputs are mutated.
    """
    validate_draft(draft)

    items = list(draft.line_items)
    totals = compute_totals(items, rules.gst_rate)
    number, next_counters = allocate_number(doc_type, counters, rules)

    document = Document(
        id=id_factory("doc"),
        type=doc_type,
        number=number,
        client_name=draft.client_name,
        client_address=draft.client_address,
        date=today(),
        items=items,
        subtotal=totals.subtotal,
        gst_amount=totals.gst_amount,
        total=totals.total,
    )

    if doc_type is DocumentType.INVOICE:
        updated = apply_stock_decrement(products, items)
    else:
        updated = [product.model_copy() for product in products]

    return FinalizedDocument(document=document, products=updated, counters=next_counters)

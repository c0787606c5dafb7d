"""Unit tests for the ledger engine."""

import math
import re
from datetime import date

import pytest

from ledgerbook.core.entities import (
    Counters,
    DocumentType,
    Draft,
    LineItem,
    Product,
)
from ledgerbook.core.exceptions import DraftValidationError
from ledgerbook.core.services.ledger import (
    GST_RATE,
    LedgerRules,
    LineItemOutcome,
    add_line_item,
    allocate_number,
    apply_stock_decrement,
    compute_totals,
    finalize_document,
    format_number,
    new_id,
    remove_line_item,
    validate_draft,
)


def _fixed_id(prefix: str) -> str:
    return f"{prefix}_fixed"


class TestNewId:
    def test_prefix_and_hex_suffix(self):
        assert re.fullmatch(r"prod_[0-9a-f]{12}", new_id("prod"))

    def test_unique(self):
        assert len({new_id("doc") for _ in range(100)}) == 100


class TestAddLineItem:
    def test_adds_snapshot_of_product(self, products):
        draft = Draft()

        result = add_line_item(draft, products, "p1", 2)

        assert result.outcome is LineItemOutcome.ADDED
        assert draft.line_items == [
            LineItem(product_id="p1", name="Widget", price=10, quantity=2)
        ]
        assert result.item == draft.line_items[0]
        assert result.exceeds_stock is False

    def test_same_product_merges_quantity(self, products):
        draft = Draft()

        add_line_item(draft, products, "p1", 2)
        result = add_line_item(draft, products, "p1", 3)

        assert result.outcome is LineItemOutcome.MERGED
        assert len(draft.line_items) == 1
        assert draft.line_items[0].quantity == 5

    def test_merge_keeps_position(self, products):
        draft = Draft()
        add_line_item(draft, products, "p1", 1)
        add_line_item(draft, products, "p2", 1)

        add_line_item(draft, products, "p1", 1)

        assert [i.product_id for i in draft.line_items] == ["p1", "p2"]

    def test_unknown_product_is_skipped(self, products):
        draft = Draft()

        result = add_line_item(draft, products, "missing", 1)

        assert result.outcome is LineItemOutcome.SKIPPED_UNKNOWN_PRODUCT
        assert result.skipped
        assert result.item is None
        assert draft.line_items == []

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_is_skipped(self, products, quantity):
        draft = Draft()

        result = add_line_item(draft, products, "p1", quantity)

        assert result.outcome is LineItemOutcome.SKIPPED_INVALID_QUANTITY
        assert draft.line_items == []

    def test_exceeding_stock_is_allowed_but_flagged(self, products):
        draft = Draft()

        add_line_item(draft, products, "p1", 4)
        result = add_line_item(draft, products, "p1", 4)

        assert result.exceeds_stock is True
        assert draft.line_items[0].quantity == 8

    def test_snapshot_not_changed_by_later_product_edit(self, products):
        draft = Draft()
        add_line_item(draft, products, "p1", 1)

        edited = [products[0].model_copy(update={"name": "Renamed", "price": 99})]
        add_line_item(draft, edited, "p1", 1)

        assert draft.line_items[0].name == "Widget"
        assert draft.line_items[0].price == 10
        assert draft.line_items[0].quantity == 2


class TestRemoveLineItem:
    def test_removes_matching_line(self, products):
        draft = Draft()
        add_line_item(draft, products, "p1", 1)
        add_line_item(draft, products, "p2", 1)

        assert remove_line_item(draft, "p1") is True
        assert [i.product_id for i in draft.line_items] == ["p2"]

    def test_absent_line_is_noop(self, products):
        draft = Draft()
        add_line_item(draft, products, "p1", 1)

        assert remove_line_item(draft, "p2") is False
        assert len(draft.line_items) == 1


class TestComputeTotals:
    def test_worked_example(self):
        items = [LineItem(product_id="p1", name="Widget", price=10, quantity=5)]

        totals = compute_totals(items)

        assert totals.subtotal == 50
        assert totals.gst_amount == pytest.approx(9)
        assert totals.total == pytest.approx(59)

    def test_empty(self):
        totals = compute_totals([])
        assert (totals.subtotal, totals.gst_amount, totals.total) == (0, 0, 0)

    @pytest.mark.parametrize(
        "lines",
        [
            [(0.1, 3), (0.2, 7)],
            [(19.99, 1), (1234.5, 12), (0, 4)],
            [(3.33, 333)],
        ],
    )
    def test_total_is_subtotal_plus_gst(self, lines):
        items = [
            LineItem(product_id=f"p{i}", name="x", price=price, quantity=qty)
            for i, (price, qty) in enumerate(lines)
        ]

        totals = compute_totals(items)

        assert totals.subtotal == pytest.approx(sum(p * q for p, q in lines))
        assert math.isclose(totals.total, totals.subtotal + totals.subtotal * GST_RATE)

    def test_custom_rate(self):
        items = [LineItem(product_id="p1", name="x", price=100, quantity=1)]
        assert compute_totals(items, gst_rate=0.05).gst_amount == pytest.approx(5)


class TestAllocateNumber:
    def test_format(self):
        assert format_number(DocumentType.INVOICE, 7) == "INV-0007"
        assert format_number(DocumentType.ESTIMATE, 12345) == "EST-12345"

    def test_invoice_numbers_increase_without_gaps(self):
        counters = Counters()
        numbers = []
        for doc_type in [
            DocumentType.INVOICE,
            DocumentType.ESTIMATE,
            DocumentType.INVOICE,
            DocumentType.ESTIMATE,
            DocumentType.INVOICE,
        ]:
            number, counters = allocate_number(doc_type, counters)
            numbers.append(number)

        assert numbers == ["INV-0001", "EST-0001", "INV-0002", "EST-0002", "INV-0003"]
        assert counters == Counters(invoice=4, estimate=3)

    def test_input_counters_unchanged(self):
        counters = Counters(invoice=3, estimate=9)

        number, advanced = allocate_number(DocumentType.ESTIMATE, counters)

        assert number == "EST-0009"
        assert counters == Counters(invoice=3, estimate=9)
        assert advanced == Counters(invoice=3, estimate=10)

    def test_custom_rules(self):
        rules = LedgerRules(invoice_prefix="BE", number_width=6)
        number, _ = allocate_number(DocumentType.INVOICE, Counters(invoice=42), rules)
        assert number == "BE-000042"


class TestApplyStockDecrement:
    def test_decrements_summed_quantity(self, products):
        items = [
            LineItem(product_id="p1", name="Widget", price=10, quantity=2),
            LineItem(product_id="p2", name="Gadget", price=25.5, quantity=3),
            LineItem(product_id="p1", name="Widget", price=10, quantity=1),
        ]

        updated = apply_stock_decrement(products, items)

        assert [p.stock for p in updated] == [2, 7, 0]
        assert [p.stock for p in products] == [5, 10, 0]

    def test_missing_product_ignored(self, products):
        items = [LineItem(product_id="gone", name="Old", price=1, quantity=1)]
        assert apply_stock_decrement(products, items) == products

    def test_stock_may_go_negative(self, widget):
        items = [LineItem(product_id="p1", name="Widget", price=10, quantity=8)]
        assert apply_stock_decrement([widget], items)[0].stock == -3


class TestValidateDraft:
    def test_complete_draft_passes(self, draft):
        validate_draft(draft)

    def test_reports_every_problem(self):
        with pytest.raises(DraftValidationError) as exc_info:
            validate_draft(Draft())

        assert set(exc_info.value.problems) == {"client_name", "line_items"}

    def test_missing_client_only(self, draft):
        draft.client_name = ""
        with pytest.raises(DraftValidationError) as exc_info:
            validate_draft(draft)
        assert set(exc_info.value.problems) == {"client_name"}


class TestFinalizeDocument:
    def test_invoice_worked_example(self, products):
        draft = Draft(client_name="Acme")
        add_line_item(draft, products, "p1", 2)
        add_line_item(draft, products, "p1", 3)

        result = finalize_document(
            draft,
            DocumentType.INVOICE,
            Counters(),
            products,
            today=lambda: date(2024, 1, 15),
            id_factory=_fixed_id,
        )

        doc = result.document
        assert doc.id == "doc_fixed"
        assert doc.number == "INV-0001"
        assert doc.type is DocumentType.INVOICE
        assert doc.client_name == "Acme"
        assert doc.date == date(2024, 1, 15)
        assert doc.items == [LineItem(product_id="p1", name="Widget", price=10, quantity=5)]
        assert doc.subtotal == 50
        assert doc.gst_amount == pytest.approx(9)
        assert doc.total == pytest.approx(59)
        assert result.products[0].stock == 0
        assert result.counters == Counters(invoice=2, estimate=1)

    def test_estimate_never_touches_stock(self, draft, products):
        result = finalize_document(draft, DocumentType.ESTIMATE, Counters(), products)

        assert result.document.number == "EST-0001"
        assert [p.stock for p in result.products] == [p.stock for p in products]
        assert result.counters == Counters(invoice=1, estimate=2)

    def test_inputs_are_not_mutated(self, draft, products):
        before_draft = draft.model_copy(deep=True)

        finalize_document(draft, DocumentType.INVOICE, Counters(), products)

        assert draft == before_draft
        assert products[0].stock == 5

    def test_empty_client_name_rejected(self, draft, products):
        draft.client_name = ""

        with pytest.raises(DraftValidationError):
            finalize_document(draft, DocumentType.INVOICE, Counters(), products)

    def test_empty_line_items_rejected(self, products):
        with pytest.raises(DraftValidationError):
            finalize_document(
                Draft(client_name="Acme"), DocumentType.INVOICE, Counters(), products
            )

    def test_deleted_product_keeps_snapshot(self, draft):
        result = finalize_document(draft, DocumentType.INVOICE, Counters(), [])

        assert result.document.items[0].name == "Widget"
        assert result.products == []

    def test_rules_apply(self, draft, products):
        rules = LedgerRules(gst_rate=0.05, invoice_prefix="TAX", number_width=3)

        result = finalize_document(
            draft, DocumentType.INVOICE, Counters(invoice=8), products, rules=rules
        )

        assert result.document.number == "TAX-008"
        assert result.document.gst_amount == pytest.approx(2.5)

    def test_default_date_is_today(self, draft, products):
        result = finalize_document(draft, DocumentType.ESTIMATE, Counters(), products)
        assert result.document.date == date.today()

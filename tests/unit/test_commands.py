"""Tests for command parsing and the command dispatcher."""

from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from ledgerbook.application.commands import (
    DRAFT_INCOMPLETE_NOTICE,
    AddLineItemCommand,
    AddProductCommand,
    ClearDraftCommand,
    CommandDispatcher,
    CommandRequest,
    DeleteProductCommand,
    RemoveLineItemCommand,
    SaveDocumentCommand,
    SetClientCommand,
    UpdateProductCommand,
    ViewDocumentCommand,
)
from ledgerbook.application.use_cases.draft_session import DraftSession
from ledgerbook.application.use_cases.finalize_document import FinalizeDocumentUseCase
from ledgerbook.core.entities import Counters, DocumentType, Product
from ledgerbook.core.exceptions import DocumentNotFoundError, ProductNotFoundError
from ledgerbook.core.services.ledger import LedgerRules


@pytest.fixture
def session() -> DraftSession:
    return DraftSession(gst_rate=0.18)


@pytest.fixture
def inventory_store(products):
    store = AsyncMock()
    store.list_products.return_value = products
    return store


@pytest.fixture
def document_store():
    store = AsyncMock()
    store.list_documents.return_value = []
    store.find_by_id.return_value = None
    return store


@pytest.fixture
def ledger_store(products):
    store = AsyncMock()
    store.finalize.side_effect = lambda build: build(products, Counters())
    return store


@pytest.fixture
def dispatcher(session, inventory_store, document_store, ledger_store):
    return CommandDispatcher(
        session,
        inventory_store,
        document_store,
        FinalizeDocumentUseCase(ledger_store=ledger_store, rules=LedgerRules()),
    )


class TestCommandParsing:
    def test_discriminates_on_action(self):
        request = CommandRequest.model_validate(
            {"command": {"action": "add_line_item", "product_id": "p1", "quantity": 2}}
        )
        assert isinstance(request.command, AddLineItemCommand)
        assert request.command.quantity == 2

    def test_save_document_type(self):
        request = CommandRequest.model_validate(
            {"command": {"action": "save_document", "type": "Estimate"}}
        )
        assert request.command == SaveDocumentCommand(type=DocumentType.ESTIMATE)

    def test_unknown_action_rejected(self):
        with pytest.raises(ValidationError):
            CommandRequest.model_validate({"command": {"action": "launch_rocket"}})

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            AddProductCommand(name="Bad", price=-1, stock=0)


class TestSnapshot:
    async def test_lists_available_products(self, dispatcher):
        snapshot = await dispatcher.dispatch(ClearDraftCommand())

        assert [p.id for p in snapshot.products] == ["p1", "p2", "p3"]
        assert [p.id for p in snapshot.available_products] == ["p1", "p2"]
        assert snapshot.notice is None
        assert snapshot.selected_document is None


class TestProductCommands:
    async def test_add_product(self, dispatcher, inventory_store):
        inventory_store.add.return_value = Product(id="p9", name="Nails", price=2, stock=100)

        await dispatcher.dispatch(AddProductCommand(name="Nails", price=2, stock=100))

        inventory_store.add.assert_awaited_once()

    async def test_update_product(self, dispatcher, inventory_store):
        inventory_store.update.side_effect = lambda product: product

        await dispatcher.dispatch(
            UpdateProductCommand(id="p1", name="Widget", price=11, stock=5)
        )

        updated = inventory_store.update.await_args.args[0]
        assert updated.id == "p1"
        assert updated.price == 11

    async def test_delete_unknown_product(self, dispatcher, inventory_store):
        inventory_store.delete.return_value = False

        with pytest.raises(ProductNotFoundError):
            await dispatcher.dispatch(DeleteProductCommand(id="missing"))


class TestDraftCommands:
    async def test_set_client(self, dispatcher):
        snapshot = await dispatcher.dispatch(
            SetClientCommand(client_name="Acme", client_address="Pune")
        )
        assert snapshot.draft.client_name == "Acme"
        assert snapshot.draft.client_address == "Pune"

    async def test_add_line_item_updates_totals(self, dispatcher):
        snapshot = await dispatcher.dispatch(AddLineItemCommand(product_id="p1", quantity=5))

        assert snapshot.draft.line_items[0].quantity == 5
        assert snapshot.draft.totals.subtotal == 50
        assert snapshot.draft.totals.total == pytest.approx(59)
        assert snapshot.notice is None

    async def test_unknown_product_notice(self, dispatcher):
        snapshot = await dispatcher.dispatch(AddLineItemCommand(product_id="nope"))

        assert snapshot.notice == "Product not found: nope"
        assert snapshot.draft.line_items == []

    async def test_zero_quantity_notice(self, dispatcher):
        snapshot = await dispatcher.dispatch(AddLineItemCommand(product_id="p1", quantity=0))

        assert snapshot.notice == "Quantity must be at least 1."
        assert snapshot.draft.line_items == []

    async def test_over_stock_notice_keeps_line(self, dispatcher):
        snapshot = await dispatcher.dispatch(AddLineItemCommand(product_id="p1", quantity=6))

        assert snapshot.notice == "Quantity exceeds available stock."
        assert snapshot.draft.line_items[0].quantity == 6

    async def test_remove_line_item(self, dispatcher):
        await dispatcher.dispatch(AddLineItemCommand(product_id="p1"))

        snapshot = await dispatcher.dispatch(RemoveLineItemCommand(product_id="p1"))

        assert snapshot.draft.line_items == []


class TestSaveDocument:
    async def test_incomplete_draft_notice(self, dispatcher):
        await dispatcher.dispatch(AddLineItemCommand(product_id="p1"))

        snapshot = await dispatcher.dispatch(SaveDocumentCommand(type=DocumentType.INVOICE))

        assert snapshot.notice == DRAFT_INCOMPLETE_NOTICE
        assert len(snapshot.draft.line_items) == 1

    async def test_saved_document_is_selected(self, dispatcher):
        await dispatcher.dispatch(SetClientCommand(client_name="Acme"))
        await dispatcher.dispatch(AddLineItemCommand(product_id="p1", quantity=5))

        snapshot = await dispatcher.dispatch(SaveDocumentCommand(type=DocumentType.INVOICE))

        assert snapshot.notice == "Invoice INV-0001 saved."
        assert snapshot.selected_document.number == "INV-0001"
        assert snapshot.selected_document.total == pytest.approx(59)
        assert snapshot.draft.line_items == []
        assert snapshot.draft.client_name == ""


class TestViewDocument:
    async def test_selects_document(self, dispatcher, document_store, sample_document):
        document_store.find_by_id.return_value = sample_document

        snapshot = await dispatcher.dispatch(ViewDocumentCommand(id=sample_document.id))

        assert snapshot.selected_document.id == sample_document.id

    async def test_missing_document(self, dispatcher):
        with pytest.raises(DocumentNotFoundError):
            await dispatcher.dispatch(ViewDocumentCommand(id="doc_missing"))

"""Fixtures for API tests: the app wired to in-memory store doubles."""

from unittest.mock import AsyncMock, Mock

import pytest
from httpx import ASGITransport, AsyncClient

from ledgerbook.api.dependencies import (
    get_add_product_use_case,
    get_command_dispatcher,
    get_delete_product_use_case,
    get_doc_store,
    get_document_pdf_use_case,
    get_finalize_document_use_case,
    get_product_store,
    get_update_product_use_case,
)
from ledgerbook.api.main import app
from ledgerbook.application.commands import CommandDispatcher
from ledgerbook.application.use_cases import (
    AddProductUseCase,
    DeleteProductUseCase,
    FinalizeDocumentUseCase,
    GenerateDocumentPdfUseCase,
    UpdateProductUseCase,
    get_draft_session,
)
from ledgerbook.application.use_cases.generate_document_pdf import DocumentPdfResult
from ledgerbook.core.entities import Counters
from ledgerbook.core.services.ledger import LedgerRules

OVERRIDDEN = (
    get_add_product_use_case,
    get_command_dispatcher,
    get_delete_product_use_case,
    get_doc_store,
    get_document_pdf_use_case,
    get_finalize_document_use_case,
    get_product_store,
    get_update_product_use_case,
)


@pytest.fixture
def inventory_store(products):
    store = AsyncMock()
    store.list_products.return_value = products
    store.list_available.return_value = [p for p in products if p.available]
    return store


@pytest.fixture
def document_store(sample_document):
    store = AsyncMock()
    store.list_documents.return_value = [sample_document]
    store.find_by_id.side_effect = lambda document_id: (
        sample_document if document_id == sample_document.id else None
    )
    return store


@pytest.fixture
def ledger_store(products):
    store = AsyncMock()
    store.finalize.side_effect = lambda build: build(products, Counters())
    return store


@pytest.fixture
def pdf_use_case():
    uc = Mock(spec=GenerateDocumentPdfUseCase)
    uc.execute = AsyncMock(
        return_value=DocumentPdfResult(
            pdf_bytes=b"%PDF-1.4 fake pdf content",
            document_id="doc_0123456789ab",
            file_name="INV-0001.pdf",
            file_size=25,
        )
    )
    return uc


@pytest.fixture
async def client(inventory_store, document_store, ledger_store, pdf_use_case):
    def finalize_use_case() -> FinalizeDocumentUseCase:
        return FinalizeDocumentUseCase(ledger_store=ledger_store, rules=LedgerRules())

    app.dependency_overrides[get_product_store] = lambda: inventory_store
    app.dependency_overrides[get_doc_store] = lambda: document_store
    app.dependency_overrides[get_add_product_use_case] = lambda: AddProductUseCase(
        inventory_store
    )
    app.dependency_overrides[get_update_product_use_case] = lambda: UpdateProductUseCase(
        inventory_store
    )
    app.dependency_overrides[get_delete_product_use_case] = lambda: DeleteProductUseCase(
        inventory_store
    )
    app.dependency_overrides[get_finalize_document_use_case] = finalize_use_case
    app.dependency_overrides[get_document_pdf_use_case] = lambda: pdf_use_case
    app.dependency_overrides[get_command_dispatcher] = lambda: CommandDispatcher(
        get_draft_session(), inventory_store, document_store, finalize_use_case()
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    for dependency in OVERRIDDEN:
        app.dependency_overrides.pop(dependency, None)

"""Pytest configuration and fixtures."""

from collections.abc import Iterator
from datetime import date

import pytest

from ledgerbook.application.use_cases.draft_session import reset_draft_session
from ledgerbook.core.entities import (
    Document,
    DocumentType,
    Draft,
    LineItem,
    Product,
)


@pytest.fixture(autouse=True)
def fresh_draft_session() -> Iterator[None]:
    """Every test starts with an empty process-wide draft."""
    reset_draft_session()
    yield
    reset_draft_session()


@pytest.fixture
def widget() -> Product:
    """Product used throughout the worked examples."""
    return Product(id="p1", name="Widget", price=10, stock=5)


@pytest.fixture
def products(widget: Product) -> list[Product]:
    """Small inventory, including one out-of-stock product."""
    return [
        widget,
        Product(id="p2", name="Gadget", price=25.5, stock=10),
        Product(id="p3", name="Sold Out", price=4, stock=0),
    ]


@pytest.fixture
def draft() -> Draft:
    """Draft ready to finalize."""
    return Draft(
        client_name="Acme",
        client_address="12 MG Road, Pune",
        line_items=[LineItem(product_id="p1", name="Widget", price=10, quantity=5)],
    )


@pytest.fixture
def sample_document() -> Document:
    """A saved invoice."""
    return Document(
        id="doc_0123456789ab",
        type=DocumentType.INVOICE,
        number="INV-0001",
        client_name="Acme",
        client_address="12 MG Road, Pune",
        date=date(2024, 1, 15),
        items=[LineItem(product_id="p1", name="Widget", price=10, quantity=5)],
        subtotal=50.0,
        gst_amount=9.0,
        total=59.0,
    )

"""Unit tests for the product use cases."""

from unittest.mock import AsyncMock

import pytest

from ledgerbook.application.dto.requests import CreateProductRequest, UpdateProductRequest
from ledgerbook.application.use_cases.manage_products import (
    AddProductUseCase,
    DeleteProductUseCase,
    UpdateProductUseCase,
)
from ledgerbook.core.entities import Product, ProductData
from ledgerbook.core.exceptions import ProductNotFoundError


@pytest.fixture
def mock_inventory_store():
    """Create a mock inventory store."""
    return AsyncMock()


class TestAddProductUseCase:
    async def test_adds_product_data(self, mock_inventory_store):
        mock_inventory_store.add.return_value = Product(
            id="prod_abc", name="Cement", price=380, stock=12
        )
        uc = AddProductUseCase(inventory_store=mock_inventory_store)

        product = await uc.execute(CreateProductRequest(name="Cement", price=380, stock=12))

        mock_inventory_store.add.assert_awaited_once_with(
            ProductData(name="Cement", price=380, stock=12)
        )
        assert product.id == "prod_abc"

    async def test_to_response(self, mock_inventory_store, widget):
        response = AddProductUseCase.to_response(widget)
        assert response.id == "p1"
        assert response.available is True


class TestUpdateProductUseCase:
    async def test_replaces_by_id(self, mock_inventory_store):
        mock_inventory_store.update.side_effect = lambda product: product
        uc = UpdateProductUseCase(inventory_store=mock_inventory_store)

        product = await uc.execute(
            "p1", UpdateProductRequest(name="Widget XL", price=12, stock=3)
        )

        assert product == Product(id="p1", name="Widget XL", price=12, stock=3)

    async def test_unknown_id_raises(self, mock_inventory_store):
        mock_inventory_store.update.return_value = None
        uc = UpdateProductUseCase(inventory_store=mock_inventory_store)

        with pytest.raises(ProductNotFoundError):
            await uc.execute("missing", UpdateProductRequest(name="x", price=1, stock=1))


class TestDeleteProductUseCase:
    async def test_deletes(self, mock_inventory_store):
        mock_inventory_store.delete.return_value = True
        uc = DeleteProductUseCase(inventory_store=mock_inventory_store)

        await uc.execute("p1")

        mock_inventory_store.delete.assert_awaited_once_with("p1")

    async def test_unknown_id_raises(self, mock_inventory_store):
        mock_inventory_store.delete.return_value = False
        uc = DeleteProductUseCase(inventory_store=mock_inventory_store)

        with pytest.raises(ProductNotFoundError):
            await uc.execute("missing")

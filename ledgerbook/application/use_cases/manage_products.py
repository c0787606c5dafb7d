"""Inventory use cases: add, update and delete products."""

from ledgerbook.application.dto.requests import CreateProductRequest, UpdateProductRequest
from ledgerbook.application.dto.responses import ProductResponse, product_response
from ledgerbook.config import get_logger
from ledgerbook.core.entities.product import Product
from ledgerbook.core.exceptions import ProductNotFoundError
from ledgerbook.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


class _InventoryUseCase:
    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from ledgerbook.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    @staticmethod
    def to_response(product: Product) -> ProductResponse:
        """Convert result to API response."""
        return product_response(product)


class AddProductUseCase(_InventoryUseCase):
    """Add a product; the store assigns its id."""

    async def execute(self, request: CreateProductRequest) -> Product:
        logger.info("add_product_started", name=request.name)

        store = await self._get_inventory_store()
        product = await store.add(request.to_product_data())

        logger.info("add_product_complete", product_id=product.id)
        return product


class UpdateProductUseCase(_InventoryUseCase):
    """Replace name, price and stock of an existing product.

    Documents already issued keep the name and price they were created
    with; only future line items see the change.
    """

    async def execute(self, product_id: str, request: UpdateProductRequest) -> Product:
        logger.info("update_product_started", product_id=product_id)

        store = await self._get_inventory_store()
        updated = await store.update(
            Product(id=product_id, **request.to_product_data().model_dump())
        )
        if updated is None:
            raise ProductNotFoundError(product_id)

        logger.info("update_product_complete", product_id=product_id)
        return updated


class DeleteProductUseCase(_InventoryUseCase):
    """Remove a product from the inventory."""

    async def execute(self, product_id: str) -> None:
        logger.info("delete_product_started", product_id=product_id)

        store = await self._get_inventory_store()
        if not await store.delete(product_id):
            raise ProductNotFoundError(product_id)

        logger.info("delete_product_complete", product_id=product_id)

"""SQLite implementation of inventory storage."""

from pydantic import TypeAdapter

from ledgerbook.config import get_logger
from ledgerbook.core.entities.product import Product, ProductData
from ledgerbook.core.interfaces.inventory_store import IInventoryStore
from ledgerbook.core.services.ledger import new_id
from ledgerbook.infrastructure.storage.sqlite.state_store import (
    PRODUCTS_KEY,
    SQLiteStateStore,
    dump_records,
)

logger = get_logger(__name__)

PRODUCT_LIST = TypeAdapter(list[Product])


class SQLiteInventoryStore(IInventoryStore):
    """Inventory kept as the JSON array under the ``products`` key."""

    def __init__(self, state: SQLiteStateStore | None = None):
        self._state = state or SQLiteStateStore()

    async def add(self, data: ProductData) -> Product:
        """Assign a fresh id and append."""
        product = Product(id=new_id("prod"), **data.model_dump())
        async with self._state.mutation() as tx:
            products = await tx.read(PRODUCTS_KEY, PRODUCT_LIST, [])
            products.append(product)
            await tx.write(PRODUCTS_KEY, dump_records(products))
        logger.info("product_added", product_id=product.id, name=product.name)
        return product

    async def update(self, product: Product) -> Product | None:
        """Replace by id; no write when the id is unknown."""
        async with self._state.mutation() as tx:
            products = await tx.read(PRODUCTS_KEY, PRODUCT_LIST, [])
            for index, existing in enumerate(products):
                if existing.id == product.id:
                    products[index] = product
                    break
            else:
                logger.info("product_update_skipped", product_id=product.id)
                return None
            await tx.write(PRODUCTS_KEY, dump_records(products))
        logger.info("product_updated", product_id=product.id)
        return product

    async def delete(self, product_id: str) -> bool:
        """Remove by id. Documents keep their own snapshot, so nothing else changes."""
        async with self._state.mutation() as tx:
            products = await tx.read(PRODUCTS_KEY, PRODUCT_LIST, [])
            remaining = [p for p in products if p.id != product_id]
            if len(remaining) == len(products):
                return False
            await tx.write(PRODUCTS_KEY, dump_records(remaining))
        logger.info("product_deleted", product_id=product_id)
        return True

    async def get(self, product_id: str) -> Product | None:
        """Get product by id."""
        for product in await self.list_products():
            if product.id == product_id:
                return product
        return None

    async def list_products(self) -> list[Product]:
        """List all products in insertion order."""
        return await self._state.load(PRODUCTS_KEY, PRODUCT_LIST, [])

    async def list_available(self) -> list[Product]:
        """List products with stock above zero."""
        return [p for p in await self.list_products() if p.available]

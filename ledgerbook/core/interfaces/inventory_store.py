"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod

from ledgerbook.core.entities.product import Product, ProductData


class IInventoryStore(ABC):
    """Interface for product persistence."""

    @abstractmethod
    async def add(self, data: ProductData) -> Product:
        """Assign a fresh id to *data* and append it to the inventory."""
        pass

    @abstractmethod
    async def update(self, product: Product) -> Product | None:
        """Replace the product with the same id; None if the id is absent."""
        pass

    @abstractmethod
    async def delete(self, product_id: str) -> bool:
        """Remove a product by id; False if the id is absent."""
        pass

    @abstractmethod
    async def get(self, product_id: str) -> Product | None:
        """Get product by id."""
        pass

    @abstractmethod
    async def list_products(self) -> list[Product]:
        """List all products in insertion order."""
        pass

    @abstractmethod
    async def list_available(self) -> list[Product]:
        """List products with stock on hand."""
        pass

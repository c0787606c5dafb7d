"""Inventory domain entities."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProductData(BaseModel):
    """Product fields supplied by the caller; the store assigns the id."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    price: float
    stock: int


class Product(ProductData):
    """A product in the inventory, source of truth for price and stock.

    Stock is not constrained here: invoicing more than is on hand drives it
    negative and the stored value must still load.
    """

    id: str

    @property
    def available(self) -> bool:
        return self.stock > 0

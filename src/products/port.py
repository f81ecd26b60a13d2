"""Product lookup port (abstract interface).

Ordering only needs to read a product's name and brand when an item is
added to a cart or an order; where product records are stored is up to the
adapter.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Product:
    """Read model of a catalogue product."""

    product_id: str
    name: str
    brand: str
    description: str = ""
    tags: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = field(default=None, compare=False)


class ProductCatalogue(ABC):
    """Abstract product lookup interface."""

    @abstractmethod
    async def get_product(self, product_id: str) -> Product | None:
        """Return the product, or None when no such product exists."""
        ...

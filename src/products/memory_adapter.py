"""In-memory product catalogue for development and testing.

Ordering reads products through ``get_catalogue()``; tests install their own
catalogue with ``use_catalogue()`` and go back to a fresh in-memory one with
``reset_catalogue()``.
"""

from datetime import UTC, datetime

from products.port import Product, ProductCatalogue


class InMemoryProductCatalogue(ProductCatalogue):
    def __init__(self) -> None:
        self._products: dict[str, Product] = {}
        self.calls: list[str] = []

    def add_product(self, product_id, name, brand, description="", tags=()) -> Product:
        """Create or replace a product record."""
        now = datetime.now(UTC)
        product = Product(
            product_id=str(product_id),
            name=name,
            brand=brand,
            description=description,
            tags=tuple(tags),
            created_at=now,
            updated_at=now,
        )
        self._products[product.product_id] = product
        return product

    async def get_product(self, product_id: str) -> Product | None:
        self.calls.append(str(product_id))
        return self._products.get(str(product_id))


_catalogue: ProductCatalogue = InMemoryProductCatalogue()


def get_catalogue() -> ProductCatalogue:
    return _catalogue


def use_catalogue(catalogue: ProductCatalogue) -> None:
    global _catalogue
    _catalogue = catalogue


def reset_catalogue() -> None:
    use_catalogue(InMemoryProductCatalogue())

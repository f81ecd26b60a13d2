"""Product and price lookup for items added to carts and orders."""

import asyncio

from pricing.pricing.lookup import get_price
from pricing.pricing.pricing import PricingItem
from products.memory_adapter import get_catalogue
from products.port import Product
from shared.config import get_settings
from shared.exceptions import PricingNotFound, ProductNotFound


async def lookup_item(product_id: str, currency: str, zone: str | None = None) -> tuple[Product, PricingItem]:
    """Fetch the product and its current price concurrently.

    A missing product is reported before a missing price, whatever order the
    two lookups complete in.
    """
    zone = zone or get_settings().pricing_zone

    product, price = await asyncio.gather(
        get_catalogue().get_product(product_id),
        get_price(product_id, currency, zone),
    )

    if product is None:
        raise ProductNotFound(product_id)
    if price is None:
        raise PricingNotFound(product_id)
    return product, price

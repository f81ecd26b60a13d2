"""Price lookups — reads used by the API and the client used by other contexts."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from pricing.domain import logger, pricing
from pricing.pricing.pricing import Pricing, PricingItem
from shared.exceptions import PricingNotFound


def find_pricing(product_id: str) -> Pricing | None:
    try:
        return current_domain.repository_for(Pricing).get(product_id)
    except ObjectNotFoundError:
        return None


def resolve_price(product_id: str, currency: str, zone: str) -> PricingItem:
    """Resolve a product's effective price, raising PricingNotFound when there is none."""
    logger.debug("price_lookup", product_id=product_id, currency=currency, zone=zone)
    record = find_pricing(product_id)
    if record is None:
        raise PricingNotFound(product_id)
    return record.resolve(currency, zone)


async def get_price(product_id: str, currency: str, zone: str) -> PricingItem | None:
    """Resolve a product's price from any context, or None when it has no price for currency and zone."""
    with pricing.domain_context():
        try:
            return resolve_price(product_id, currency, zone)
        except PricingNotFound:
            return None

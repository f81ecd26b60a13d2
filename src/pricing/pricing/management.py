"""Pricing management — commands and handler.

Pricing records are created the first time a product is priced and are only
ever replaced or merged afterwards.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from pricing.domain import logger, pricing
from pricing.pricing.pricing import Pricing, PricingItem, SalePricingItem, load_items


@pricing.command(part_of="Pricing")
class InitializePricing:
    """Seed a product's prices, replacing whatever was stored before."""

    product_id = Identifier(required=True)
    msrp_prices = Text()  # JSON: list of {price, currency, zone}
    list_prices = Text()  # JSON: list of {price, currency, zone}
    sale_prices = Text()  # JSON: list of {price, currency, zone, start, end}


@pricing.command(part_of="Pricing")
class UpdatePricing:
    """Merge price updates into a product's existing prices."""

    product_id = Identifier(required=True)
    msrp_prices = Text()
    list_prices = Text()
    sale_prices = Text()


def _tiers(command) -> dict:
    return {
        "msrp_prices": load_items(command.msrp_prices, PricingItem),
        "list_prices": load_items(command.list_prices, PricingItem),
        "sale_prices": load_items(command.sale_prices, SalePricingItem),
    }


def pricing_for(product_id) -> Pricing:
    """Load a product's pricing, or start a blank record for a new product."""
    try:
        return current_domain.repository_for(Pricing).get(product_id)
    except ObjectNotFoundError:
        return Pricing.create(product_id)


@pricing.command_handler(part_of=Pricing)
class ManagePricingHandler:
    @handle(InitializePricing)
    def initialize_pricing(self, command):
        record = pricing_for(command.product_id)
        record.initialize(**_tiers(command))
        current_domain.repository_for(Pricing).add(record)
        logger.info("pricing_initialized", product_id=command.product_id)

    @handle(UpdatePricing)
    def update_pricing(self, command):
        record = pricing_for(command.product_id)
        record.update(**_tiers(command))
        current_domain.repository_for(Pricing).add(record)
        logger.info("pricing_updated", product_id=command.product_id)

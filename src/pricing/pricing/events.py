"""Domain events for the Pricing aggregate."""

from protean.fields import DateTime, Identifier, Integer

from pricing.domain import pricing


@pricing.event(part_of="Pricing")
class PricingInitialized:
    """All price tiers of a product were replaced."""

    __version__ = 1

    product_id = Identifier(required=True)
    msrp_count = Integer(required=True)
    list_count = Integer(required=True)
    sale_count = Integer(required=True)
    initialized_at = DateTime(required=True)


@pricing.event(part_of="Pricing")
class PricingUpdated:
    """Price updates were merged into a product's price tiers."""

    __version__ = 1

    product_id = Identifier(required=True)
    msrp_count = Integer(required=True)
    list_count = Integer(required=True)
    sale_count = Integer(required=True)
    updated_at = DateTime(required=True)

"""FastAPI routes for the Pricing domain."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from pricing.api.schemas import PriceSchema, PricingRequest, PricingResponse, StatusResponse
from pricing.pricing.lookup import find_pricing, resolve_price
from pricing.pricing.management import InitializePricing, UpdatePricing
from shared.config import get_settings
from shared.exceptions import PricingNotFound

router = APIRouter(prefix="/pricing", tags=["pricing"])


def _tiers(body: PricingRequest) -> dict:
    data = body.model_dump(mode="json")
    return {tier: json.dumps(data[tier]) for tier in ("msrp_prices", "list_prices", "sale_prices")}


@router.get("/{product_id}", response_model=PricingResponse)
async def get_pricing(product_id: str) -> PricingResponse:
    record = find_pricing(product_id)
    if record is None:
        raise PricingNotFound(product_id)
    return PricingResponse(
        product_id=str(record.product_id),
        msrp_prices=[item.to_record() for item in record.msrp_items()],
        list_prices=[item.to_record() for item in record.list_items()],
        sale_prices=[item.to_record() for item in record.sale_items()],
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@router.put("/{product_id}", response_model=StatusResponse)
async def initialize_pricing(product_id: str, body: PricingRequest) -> StatusResponse:
    current_domain.process(InitializePricing(product_id=product_id, **_tiers(body)), asynchronous=False)
    return StatusResponse()


@router.patch("/{product_id}", response_model=StatusResponse)
async def update_pricing(product_id: str, body: PricingRequest) -> StatusResponse:
    current_domain.process(UpdatePricing(product_id=product_id, **_tiers(body)), asynchronous=False)
    return StatusResponse()


@router.get("/{product_id}/price", response_model=PriceSchema)
async def get_price(product_id: str, currency: str | None = None, zone: str | None = None) -> PriceSchema:
    """Resolve the effective price; defaults come from settings."""
    settings = get_settings()
    price = resolve_price(
        product_id,
        currency=currency or settings.default_currency,
        zone=zone or settings.pricing_zone,
    )
    return PriceSchema.model_validate(price.to_record())

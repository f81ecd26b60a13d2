"""Pydantic request/response schemas for the Pricing API."""

from datetime import datetime

from pydantic import BaseModel, Field


class PriceSchema(BaseModel):
    price: float = Field(ge=0)
    currency: str = Field(min_length=1)
    zone: str = Field(min_length=1)


class SalePriceSchema(PriceSchema):
    start: datetime | None = None
    end: datetime | None = None


class PricingRequest(BaseModel):
    """Body for both seeding (PUT) and merging (PATCH) a product's prices."""

    msrp_prices: list[PriceSchema] = []
    list_prices: list[PriceSchema] = []
    sale_prices: list[SalePriceSchema] = []

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "msrp_prices": [{"price": 12.0, "currency": "USD", "zone": "global"}],
                    "list_prices": [{"price": 10.0, "currency": "USD", "zone": "global"}],
                    "sale_prices": [],
                }
            ]
        }
    }


class PricingResponse(BaseModel):
    product_id: str
    msrp_prices: list[PriceSchema]
    list_prices: list[PriceSchema]
    sale_prices: list[SalePriceSchema]
    created_at: datetime
    updated_at: datetime


class StatusResponse(BaseModel):
    status: str = "ok"

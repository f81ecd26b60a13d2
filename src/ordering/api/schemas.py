"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    """Address as sent by clients.

    Fields are loosely typed here; missing or blank parts are reported as
    AddressNotValid by the domain rather than as a request-shape error.
    """

    street: str | None = None
    city: str | None = None
    state_or_region: str | None = None
    country: str | None = None
    postal_code: str | None = None
    name: str | None = None
    phone_number: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "street": "123 Main St",
                    "city": "Springfield",
                    "state_or_region": "IL",
                    "country": "US",
                    "postal_code": "62701",
                }
            ]
        }
    }


class LineItemSchema(BaseModel):
    product_id: str
    product_name: str
    product_brand: str
    price: float
    quantity: int


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class AddItemRequest(BaseModel):
    quantity: int = Field(ge=0, default=1)


class UpdateQuantityRequest(BaseModel):
    quantity: int = Field(ge=0)


class EmailRequest(BaseModel):
    email: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartResponse(BaseModel):
    user_id: str
    email: str | None = None
    items: list[LineItemSchema] = []
    billing_address: AddressSchema | None = None
    shipping_address: AddressSchema | None = None
    total: float
    currency: str
    previous_order_ids: list[str] = []
    created_at: datetime
    updated_at: datetime


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    email: str | None = None
    status: str
    items: list[LineItemSchema] = []
    billing_address: AddressSchema | None = None
    shipping_address: AddressSchema | None = None
    total: float
    currency: str
    created_at: datetime
    updated_at: datetime


class OrderIdResponse(BaseModel):
    order_id: str


class StatusResponse(BaseModel):
    status: str = "ok"

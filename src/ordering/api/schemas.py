"""Pydantic request/response schemas for the Ordering API.

These are external contracts, kept separate from the ORM models.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: int
    quantity: int = Field(ge=1, default=1)

    model_config = {"json_schema_extra": {"examples": [{"product_id": 1, "quantity": 2}]}}


class CartProductSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    price: Decimal
    image: str | None = None


class CartLineSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quantity: int
    product: CartProductSchema
    subtotal: Decimal


class CartResponse(BaseModel):
    lines: list[CartLineSchema]
    total: Decimal


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class OrderLineSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    price: Decimal
    quantity: int


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    total: Decimal
    status: str
    payment_id: str | None = None
    created_at: datetime | None = None
    lines: list[OrderLineSchema]


class OrderIdResponse(BaseModel):
    order_id: int

"""Pydantic request/response schemas for the Catalogue API."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Product Request Schemas
# ---------------------------------------------------------------------------


class CreateProductRequest(BaseModel):
    name: str
    code: str
    price: Decimal
    description: str | None = None
    image: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Valentina Hot Sauce",
                    "code": "PROD010",
                    "price": "22.00",
                    "description": "Valentina hot sauce, 370ml",
                    "image": "/products/product_10.png",
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    """Partial update: only the fields present in the request body are changed."""

    name: str | None = None
    code: str | None = None
    price: Decimal | None = None
    description: str | None = None
    image: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"price": "24.00"}]}}


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    price: Decimal
    description: str | None = None
    image: str | None = None
    created_at: datetime | None = None

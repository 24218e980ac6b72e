"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends

from catalogue.api.schemas import CreateProductRequest, ProductResponse, UpdateProductRequest
from catalogue.product.creation import create_product
from catalogue.product.details import update_product
from catalogue.product.listing import find_by_code, list_products
from catalogue.product.removal import delete_product
from shared.api import StatusResponse, current_actor
from shared.auth import Actor, require_user
from shared.utils.db import unit_of_work

product_router = APIRouter(prefix="/products", tags=["products"])


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
def list_all(actor: Actor | None = Depends(current_actor)) -> list[ProductResponse]:
    require_user(actor)
    with unit_of_work() as session:
        return [ProductResponse.model_validate(p) for p in list_products(session)]


@product_router.get("/{code}", response_model=ProductResponse)
def show(code: str, actor: Actor | None = Depends(current_actor)) -> ProductResponse:
    require_user(actor)
    with unit_of_work() as session:
        return ProductResponse.model_validate(find_by_code(session, code))


@product_router.post("", status_code=201, response_model=ProductResponse)
def create(body: CreateProductRequest, actor: Actor | None = Depends(current_actor)) -> ProductResponse:
    with unit_of_work() as session:
        product = create_product(
            session,
            actor,
            name=body.name,
            code=body.code,
            price=body.price,
            description=body.description,
            image=body.image,
        )
        return ProductResponse.model_validate(product)


@product_router.put("/{code}", response_model=ProductResponse)
def update(code: str, body: UpdateProductRequest, actor: Actor | None = Depends(current_actor)) -> ProductResponse:
    with unit_of_work() as session:
        product = update_product(session, actor, code, **body.model_dump(exclude_unset=True))
        return ProductResponse.model_validate(product)


@product_router.delete("/{code}", response_model=StatusResponse)
def delete(code: str, actor: Actor | None = Depends(current_actor)) -> StatusResponse:
    with unit_of_work() as session:
        delete_product(session, actor, code)
    return StatusResponse()

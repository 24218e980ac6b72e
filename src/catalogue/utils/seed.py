"""Demo catalogue loaded into an empty database."""

import structlog
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from catalogue.product.product import Product

logger = structlog.get_logger(__name__)

DEMO_PRODUCTS = [
    {
        "name": "Del Valle Orange Juice",
        "code": "PROD001",
        "price": "25.50",
        "description": "Orange juice 1L, 100% natural, no preservatives",
        "image": "/products/product_01.png",
    },
    {
        "name": "Chili Gummies",
        "code": "PROD002",
        "price": "15.00",
        "description": "Tamarind gummies coated in chili, sweet and spicy",
        "image": "/products/product_02.png",
    },
    {
        "name": "Mangomita",
        "code": "PROD003",
        "price": "18.50",
        "description": "Mango candy with chamoy and chili",
        "image": "/products/product_03.png",
    },
    {
        "name": "Coca Cola Can",
        "code": "PROD004",
        "price": "12.00",
        "description": "Coca Cola 355ml can",
        "image": "/products/product_04.png",
    },
    {
        "name": "Salted Pistachios",
        "code": "PROD005",
        "price": "45.00",
        "description": "Roasted and salted natural pistachios, 100g",
        "image": "/products/product_05.png",
    },
    {
        "name": "Chocolate Pistachios",
        "code": "PROD006",
        "price": "55.00",
        "description": "Pistachios coated in premium dark chocolate",
        "image": "/products/product_06.png",
    },
    {
        "name": "Orange Wine",
        "code": "PROD007",
        "price": "120.00",
        "description": "Artisanal orange wine, sweet and aromatic, 750ml",
        "image": "/products/product_07.png",
    },
    {
        "name": "Mayonnaise, Medium",
        "code": "PROD008",
        "price": "32.00",
        "description": "Creamy mayonnaise, 380g",
        "image": "/products/product_08.png",
    },
    {
        "name": "Mayonnaise, Large",
        "code": "PROD009",
        "price": "58.00",
        "description": "Creamy mayonnaise, 880g family size",
        "image": "/products/product_09.png",
    },
    {
        "name": "Valentina Hot Sauce",
        "code": "PROD010",
        "price": "22.00",
        "description": "Valentina hot sauce, 370ml",
        "image": "/products/product_10.png",
    },
    {
        "name": "Churrumais",
        "code": "PROD011",
        "price": "16.50",
        "description": "Corn snack with chili and lime, 62g",
        "image": "/products/product_11.png",
    },
]


def seed_catalogue(session: Session) -> int:
    """Insert the demo products when the catalogue is empty. Returns how many were added."""
    if session.scalar(select(func.count(Product.id))):
        return 0

    for data in DEMO_PRODUCTS:
        session.add(Product.create(**data))
    session.flush()

    logger.info("Demo catalogue seeded", products=len(DEMO_PRODUCTS))
    return len(DEMO_PRODUCTS)

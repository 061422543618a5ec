# pickbook/services/catalog.py
"""Static product catalog."""

from typing import Optional

from ..schemas.products import Product


PRODUCTS: tuple[Product, ...] = (
    Product(id="quarter", name="Quarter", required_units=1, duration_minutes=60),
    Product(id="half", name="Half", required_units=3, duration_minutes=120),
    Product(id="full", name="Full", required_units=2, duration_minutes=180),
    Product(id="pick-guide-half", name="Pick guidance (half)", required_units=3, duration_minutes=180),
    Product(id="pick-guide-full", name="Pick guidance (full)", required_units=2, duration_minutes=240),
)

_BY_ID = {p.id: p for p in PRODUCTS}


def list_products() -> list[Product]:
    return list(PRODUCTS)


def get_product(product_id: str) -> Optional[Product]:
    return _BY_ID.get(product_id)

# pickbook/routers/products.py
# Read-only: the catalog is static configuration

from fastapi import APIRouter, HTTPException

from ..schemas.products import Product
from ..services.catalog import get_product, list_products

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=list[Product])
def get_products():
    return list_products()


@router.get("/{id}", response_model=Product)
def get_product_by_id(id: str):
    product = get_product(id)
    if not product:
        raise HTTPException(status_code=404, detail="Not found")
    return product

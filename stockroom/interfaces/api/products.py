"""Products API routes — stock products with per-tenant barcodes."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from stockroom.application.services.product_service import (
    create_product,
    delete_product,
    get_product,
    get_products,
    update_product,
)
from stockroom.domain.repositories.product_repository import ProductRepository
from stockroom.domain.schemas.product import ProductCreate, ProductFilter, ProductRead, ProductUpdate
from stockroom.interfaces.api.deps import get_tenant_id
from stockroom.interfaces.deps import get_product_repository

router = APIRouter(prefix="/api/products", tags=["Products"], dependencies=[Depends(get_tenant_id)])


@router.get("", response_model=list[ProductRead])
def list_products(
    search: Optional[str] = None,
    brand_id: Optional[int] = None,
    category_id: Optional[int] = None,
    repo: ProductRepository = Depends(get_product_repository),
):
    filters = ProductFilter(search=search, brand_id=brand_id, category_id=category_id)
    return get_products(repo, filters)


@router.get("/{product_id}", response_model=ProductRead)
def product_detail(product_id: int, repo: ProductRepository = Depends(get_product_repository)):
    return get_product(repo, product_id)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create(body: ProductCreate, repo: ProductRepository = Depends(get_product_repository)):
    return create_product(repo, body)


@router.put("/{product_id}", response_model=ProductRead)
def update(product_id: int, body: ProductUpdate, repo: ProductRepository = Depends(get_product_repository)):
    return update_product(repo, product_id, body)


@router.delete("/{product_id}")
def delete(product_id: int, repo: ProductRepository = Depends(get_product_repository)):
    """Delete a product. Blocked (409) while any final product component uses it."""
    return delete_product(repo, product_id)

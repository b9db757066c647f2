"""Final products API routes — composition, status workflow, listing."""

from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from stockroom.application.services.final_product_service import (
    create_final_product,
    delete_final_product,
    get_final_product,
    get_final_products,
    mark_done,
    reset_to_pending,
    update_final_product,
)
from stockroom.domain.repositories.final_product_repository import FinalProductRepository
from stockroom.domain.schemas.final_product import (
    FinalProductCreate,
    FinalProductFilter,
    FinalProductRead,
    FinalProductUpdate,
)
from stockroom.interfaces.api.deps import get_tenant_id
from stockroom.interfaces.deps import get_final_product_repository

router = APIRouter(prefix="/api/final-products", tags=["Final Products"], dependencies=[Depends(get_tenant_id)])


@router.get("", response_model=list[FinalProductRead])
def list_final_products(
    status_filter: Optional[Literal["pending", "done"]] = Query(None, alias="status"),
    client_id: Optional[int] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    repo: FinalProductRepository = Depends(get_final_product_repository),
):
    filters = FinalProductFilter(status=status_filter, client_id=client_id, date_from=date_from, date_to=date_to)
    return get_final_products(repo, filters)


@router.get("/{final_product_id}", response_model=FinalProductRead)
def final_product_detail(
    final_product_id: int,
    repo: FinalProductRepository = Depends(get_final_product_repository),
):
    return get_final_product(repo, final_product_id)


@router.post("", response_model=FinalProductRead, status_code=status.HTTP_201_CREATED)
def compose(
    body: FinalProductCreate,
    repo: FinalProductRepository = Depends(get_final_product_repository),
):
    """Create a final product and price its components in one transaction."""
    return create_final_product(repo, body)


@router.put("/{final_product_id}/done", response_model=FinalProductRead)
def set_done(
    final_product_id: int,
    repo: FinalProductRepository = Depends(get_final_product_repository),
):
    return mark_done(repo, final_product_id)


@router.put("/{final_product_id}/reset", response_model=FinalProductRead)
def set_pending(
    final_product_id: int,
    repo: FinalProductRepository = Depends(get_final_product_repository),
):
    return reset_to_pending(repo, final_product_id)


@router.put("/{final_product_id}", response_model=FinalProductRead)
def update(
    final_product_id: int,
    body: FinalProductUpdate,
    repo: FinalProductRepository = Depends(get_final_product_repository),
):
    """Update fields; a `components` list replaces the whole bill of materials."""
    return update_final_product(repo, final_product_id, body)


@router.delete("/{final_product_id}")
def delete(
    final_product_id: int,
    repo: FinalProductRepository = Depends(get_final_product_repository),
):
    return delete_final_product(repo, final_product_id)

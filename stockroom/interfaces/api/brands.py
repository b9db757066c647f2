"""Brands API routes."""

from fastapi import APIRouter, Depends, status

from stockroom.application.services.catalog_service import (
    create_entity,
    delete_entity,
    get_or_404,
    list_entities,
    update_entity,
)
from stockroom.domain.schemas.taxonomy import BrandCreate, BrandRead, BrandUpdate
from stockroom.infrastructure.repositories.base_repository import SQLAlchemyRepository
from stockroom.interfaces.api.deps import get_tenant_id
from stockroom.interfaces.deps import get_brand_repository

router = APIRouter(prefix="/api/brands", tags=["Brands"], dependencies=[Depends(get_tenant_id)])


@router.get("", response_model=list[BrandRead])
def list_brands(repo: SQLAlchemyRepository = Depends(get_brand_repository)):
    return list_entities(repo)


@router.get("/{item_id}", response_model=BrandRead)
def get_brand(item_id: int, repo: SQLAlchemyRepository = Depends(get_brand_repository)):
    return get_or_404(repo, item_id, "Brand")


@router.post("", response_model=BrandRead, status_code=status.HTTP_201_CREATED)
def create_brand(body: BrandCreate, repo: SQLAlchemyRepository = Depends(get_brand_repository)):
    return create_entity(repo, body, "Brand", unique_field="name")


@router.put("/{item_id}", response_model=BrandRead)
def update_brand(item_id: int, body: BrandUpdate, repo: SQLAlchemyRepository = Depends(get_brand_repository)):
    return update_entity(repo, item_id, body, "Brand", unique_field="name")


@router.delete("/{item_id}")
def delete_brand(item_id: int, repo: SQLAlchemyRepository = Depends(get_brand_repository)):
    return delete_entity(repo, item_id, "Brand")

"""Categories API routes — alphabetical, tenant-scoped CRUD."""

from fastapi import APIRouter, Depends, status

from stockroom.application.services.catalog_service import (
    create_entity,
    delete_entity,
    get_or_404,
    list_entities,
    update_entity,
)
from stockroom.domain.schemas.taxonomy import CategoryCreate, CategoryRead, CategoryUpdate
from stockroom.infrastructure.repositories.base_repository import SQLAlchemyRepository
from stockroom.interfaces.api.deps import get_tenant_id
from stockroom.interfaces.deps import get_category_repository

router = APIRouter(prefix="/api/categories", tags=["Categories"], dependencies=[Depends(get_tenant_id)])


@router.get("", response_model=list[CategoryRead])
def list_categories(repo: SQLAlchemyRepository = Depends(get_category_repository)):
    return list_entities(repo)


@router.get("/{item_id}", response_model=CategoryRead)
def get_category(item_id: int, repo: SQLAlchemyRepository = Depends(get_category_repository)):
    return get_or_404(repo, item_id, "Category")


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(body: CategoryCreate, repo: SQLAlchemyRepository = Depends(get_category_repository)):
    return create_entity(repo, body, "Category", unique_field="name")


@router.put("/{item_id}", response_model=CategoryRead)
def update_category(item_id: int, body: CategoryUpdate, repo: SQLAlchemyRepository = Depends(get_category_repository)):
    return update_entity(repo, item_id, body, "Category", unique_field="name")


@router.delete("/{item_id}")
def delete_category(item_id: int, repo: SQLAlchemyRepository = Depends(get_category_repository)):
    return delete_entity(repo, item_id, "Category")

"""Currency API routes.

A currency only carries the display symbol; deleting one clears it from the
products and final products that used it.
"""

from fastapi import APIRouter, Depends, status

from stockroom.application.services.catalog_service import (
    create_entity,
    delete_entity,
    get_or_404,
    list_entities,
    update_entity,
)
from stockroom.domain.schemas.currency import CurrencyCreate, CurrencyRead, CurrencyUpdate
from stockroom.infrastructure.repositories.base_repository import SQLAlchemyRepository
from stockroom.interfaces.api.deps import get_tenant_id
from stockroom.interfaces.deps import get_currency_repository

router = APIRouter(prefix="/api/currencies", tags=["Currencies"], dependencies=[Depends(get_tenant_id)])


@router.get("", response_model=list[CurrencyRead])
def list_currencies(repo: SQLAlchemyRepository = Depends(get_currency_repository)):
    return list_entities(repo)


@router.get("/{item_id}", response_model=CurrencyRead)
def get_currency(item_id: int, repo: SQLAlchemyRepository = Depends(get_currency_repository)):
    return get_or_404(repo, item_id, "Currency")


@router.post("", response_model=CurrencyRead, status_code=status.HTTP_201_CREATED)
def create_currency(body: CurrencyCreate, repo: SQLAlchemyRepository = Depends(get_currency_repository)):
    return create_entity(repo, body, "Currency", unique_field="code")


@router.put("/{item_id}", response_model=CurrencyRead)
def update_currency(item_id: int, body: CurrencyUpdate, repo: SQLAlchemyRepository = Depends(get_currency_repository)):
    return update_entity(repo, item_id, body, "Currency", unique_field="code")


@router.delete("/{item_id}")
def delete_currency(item_id: int, repo: SQLAlchemyRepository = Depends(get_currency_repository)):
    return delete_entity(repo, item_id, "Currency")

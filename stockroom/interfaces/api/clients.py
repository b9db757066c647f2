"""Client API routes — counterparties of final product orders."""

from fastapi import APIRouter, Depends, status

from stockroom.application.services.catalog_service import (
    create_entity,
    delete_entity,
    get_or_404,
    list_entities,
    update_entity,
)
from stockroom.domain.schemas.client import ClientCreate, ClientRead, ClientUpdate
from stockroom.infrastructure.repositories.base_repository import SQLAlchemyRepository
from stockroom.interfaces.api.deps import get_tenant_id
from stockroom.interfaces.deps import get_client_repository

router = APIRouter(prefix="/api/clients", tags=["Clients"], dependencies=[Depends(get_tenant_id)])


@router.get("", response_model=list[ClientRead])
def list_clients(repo: SQLAlchemyRepository = Depends(get_client_repository)):
    return list_entities(repo)


@router.get("/{item_id}", response_model=ClientRead)
def get_client(item_id: int, repo: SQLAlchemyRepository = Depends(get_client_repository)):
    return get_or_404(repo, item_id, "Client")


@router.post("", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
def create_client(body: ClientCreate, repo: SQLAlchemyRepository = Depends(get_client_repository)):
    return create_entity(repo, body, "Client")


@router.put("/{item_id}", response_model=ClientRead)
def update_client(item_id: int, body: ClientUpdate, repo: SQLAlchemyRepository = Depends(get_client_repository)):
    return update_entity(repo, item_id, body, "Client")


@router.delete("/{item_id}")
def delete_client(item_id: int, repo: SQLAlchemyRepository = Depends(get_client_repository)):
    return delete_entity(repo, item_id, "Client")

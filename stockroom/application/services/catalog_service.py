"""Catalog service — tenant-scoped CRUD shared by categories, brands, currencies and clients."""

from typing import Any, Iterable, List, Optional, Tuple, Type

import structlog
from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError

from stockroom.core.exceptions import EntityNotFoundException, ValidationFailedError
from stockroom.domain.models.brand import Brand
from stockroom.domain.models.category import Category
from stockroom.domain.models.client import Client
from stockroom.domain.models.currency import Currency
from stockroom.domain.models.final_product import FinalProduct
from stockroom.domain.models.product import Product
from stockroom.domain.repositories.base import BaseRepository

logger = structlog.get_logger(__name__)

# Optional foreign keys a payload may carry, and the table each must point into
REFERENCE_FIELDS = {
    "category_id": (Category, "Category"),
    "brand_id": (Brand, "Brand"),
    "currency_id": (Currency, "Currency"),
    "client_id": (Client, "Client"),
}

# Rows that point at a catalog entity; cleared (not deleted) when the entity goes away
REFERENCED_BY = {
    Category: [(Product, "category_id"), (FinalProduct, "category_id")],
    Brand: [(Product, "brand_id")],
    Currency: [(Product, "currency_id"), (FinalProduct, "currency_id")],
    Client: [(FinalProduct, "client_id")],
}


def ensure_owned_references(repo: BaseRepository, data: dict) -> None:
    """Reject foreign ids that are unknown or belong to another tenant."""
    for field, (model, label) in REFERENCE_FIELDS.items():
        value = data.get(field)
        if value is None:
            continue
        owned = (
            repo.db.query(model.id)
            .filter(model.id == value, model.user_id == repo.tenant_id)
            .first()
        )
        if owned is None:
            raise ValidationFailedError(f"{label} with id {value} not found", field=field)


def get_or_404(repo: BaseRepository, id: int, label: str):
    entity = repo.get_by_id(id)
    if entity is None:
        raise EntityNotFoundException(f"{label} not found", details={"id": id})
    return entity


def list_entities(repo: BaseRepository) -> List[Any]:
    return repo.list()


def violates_unique(exc: IntegrityError, model: Type, field: str) -> bool:
    """True when the failed write broke the per-tenant unique constraint covering `field`."""
    message = str(exc.orig)
    for constraint in model.__table__.constraints:
        if isinstance(constraint, UniqueConstraint) and field in constraint.columns.keys():
            if constraint.name and constraint.name in message:
                return True
    # SQLite names the columns, not the constraint
    return "UNIQUE constraint failed" in message and f"{model.__tablename__}.{field}" in message


def translate_integrity_error(
    repo: BaseRepository, exc: IntegrityError, label: str, unique_field: Optional[str] = None
) -> ValidationFailedError:
    repo.rollback()
    if unique_field and violates_unique(exc, repo.model, unique_field):
        return ValidationFailedError(f"{label} {unique_field} already exists", field=unique_field)

    logger.warning(f"{label} write rejected by the database", error=str(exc.orig), tenant_id=repo.tenant_id)
    return ValidationFailedError(f"{label} violates a data constraint: {exc.orig}")


def create_entity(repo: BaseRepository, payload: Any, label: str, unique_field: Optional[str] = None):
    data = payload.model_dump(exclude_unset=True)
    ensure_owned_references(repo, data)
    try:
        entity = repo.create(data)
    except IntegrityError as exc:
        raise translate_integrity_error(repo, exc, label, unique_field) from exc
    logger.info(f"{label} created", id=entity.id, tenant_id=repo.tenant_id)
    return entity


def update_entity(repo: BaseRepository, id: int, payload: Any, label: str, unique_field: Optional[str] = None):
    entity = get_or_404(repo, id, label)
    data = payload.model_dump(exclude_unset=True)
    ensure_owned_references(repo, data)
    try:
        entity = repo.update(entity, data)
    except IntegrityError as exc:
        raise translate_integrity_error(repo, exc, label, unique_field) from exc
    logger.info(f"{label} updated", id=entity.id, tenant_id=repo.tenant_id, fields=sorted(data))
    return entity


def _clear_references(repo: BaseRepository, model: Type, id: int) -> Iterable[Tuple[str, int]]:
    for referencing_model, column in REFERENCED_BY.get(model, []):
        cleared = (
            repo.db.query(referencing_model)
            .filter(
                referencing_model.user_id == repo.tenant_id,
                getattr(referencing_model, column) == id,
            )
            .update({column: None}, synchronize_session=False)
        )
        if cleared:
            yield referencing_model.__tablename__, cleared


def delete_entity(repo: BaseRepository, id: int, label: str) -> dict:
    entity = get_or_404(repo, id, label)
    cleared = dict(_clear_references(repo, repo.model, id))
    repo.delete(entity)
    logger.info(f"{label} deleted", id=id, tenant_id=repo.tenant_id, cleared_references=cleared)
    return {"message": f"{label} deleted successfully"}

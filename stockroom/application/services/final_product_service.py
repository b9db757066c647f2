"""Final product service — composition of the FinalProduct/Component aggregate.

Create, update and delete run as one database transaction each: the root row
and every component either all land or none do. Components are never patched;
an update that carries a component list deletes the old set and inserts the
freshly computed one.
"""

from datetime import date, datetime
from typing import List, Sequence

import pytz
import structlog
from sqlalchemy.exc import IntegrityError

from stockroom.application.services.catalog_service import ensure_owned_references, translate_integrity_error
from stockroom.application.services.pricing import compute_component, quantize_area
from stockroom.config import get_settings
from stockroom.core.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    ValidationFailedError,
)
from stockroom.domain.models.final_product import (
    Component,
    FinalProduct,
    STATUS_DONE,
    STATUS_PENDING,
)
from stockroom.domain.repositories.final_product_repository import FinalProductRepository
from stockroom.domain.schemas.final_product import (
    ComponentIn,
    FinalProductCreate,
    FinalProductFilter,
    FinalProductUpdate,
)

logger = structlog.get_logger(__name__)
settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)


def get_current_date() -> date:
    """Get current date in the configured timezone."""
    return datetime.now(tz).date()


def get_final_products(repo: FinalProductRepository, filters: FinalProductFilter) -> List[FinalProduct]:
    return repo.get_with_filters(filters)


def get_final_product(repo: FinalProductRepository, final_product_id: int) -> FinalProduct:
    final_product = repo.get_with_relations(final_product_id)
    if final_product is None:
        raise EntityNotFoundException("Final product not found", details={"id": final_product_id})
    return final_product


def build_components(repo: FinalProductRepository, items: Sequence[ComponentIn]) -> List[Component]:
    """Price every line against its product; raise on the first invalid one."""
    components = []
    for index, item in enumerate(items):
        product = repo.get_product_for_update(item.product_id)
        if product is None:
            raise ValidationFailedError(
                f"Product with id {item.product_id} not found",
                field=f"components.{index}.product_id",
            )

        figures = compute_component(item.length, item.width, item.quantity, product.price_per_square_meter)
        available = quantize_area(product.square_meters)
        if figures.total_area > available:
            raise BusinessRuleViolationException(
                f"Total square meters ({figures.total_area}) exceeds available square meters "
                f"({available}) for product {product.name}",
                details={
                    "product_id": product.id,
                    "product_name": product.name,
                    "requested_square_meters": str(figures.total_area),
                    "available_square_meters": str(available),
                },
            )

        components.append(
            Component(
                product_id=product.id,
                length=figures.length,
                width=figures.width,
                quantity=figures.quantity,
                square_meters=figures.area_per_unit,
                total_meters=figures.total_area,
                unit_price=figures.unit_price,
                total_price=figures.total_price,
                image=item.image,
            )
        )
    return components


def create_final_product(repo: FinalProductRepository, payload: FinalProductCreate) -> FinalProduct:
    data = payload.model_dump(exclude={"components"})
    ensure_owned_references(repo, data)
    if data.get("order_date") is None:
        data["order_date"] = get_current_date()

    try:
        final_product = repo.add(FinalProduct(**data, status=STATUS_PENDING))
        components = build_components(repo, payload.components)
        repo.replace_components(final_product, components)
        repo.db.commit()
    except IntegrityError as exc:
        raise translate_integrity_error(repo, exc, "Final product", unique_field="code") from exc
    except Exception:
        repo.rollback()
        raise

    logger.info(
        "Final product composed",
        final_product_id=final_product.id,
        code=final_product.code,
        components=len(components),
        tenant_id=repo.tenant_id,
    )
    return get_final_product(repo, final_product.id)


def update_final_product(
    repo: FinalProductRepository, final_product_id: int, payload: FinalProductUpdate
) -> FinalProduct:
    final_product = repo.get_by_id(final_product_id)
    if final_product is None:
        raise EntityNotFoundException("Final product not found", details={"id": final_product_id})

    data = payload.model_dump(exclude_unset=True, exclude={"components"})
    ensure_owned_references(repo, data)

    try:
        replaced = None
        if payload.components is not None:
            components = build_components(repo, payload.components)
            repo.replace_components(final_product, components)
            replaced = len(components)

        for field, value in data.items():
            setattr(final_product, field, value)
        repo.db.flush()
        repo.db.commit()
    except IntegrityError as exc:
        raise translate_integrity_error(repo, exc, "Final product", unique_field="code") from exc
    except Exception:
        repo.rollback()
        raise

    logger.info(
        "Final product updated",
        final_product_id=final_product_id,
        fields=sorted(data),
        replaced_components=replaced,
        tenant_id=repo.tenant_id,
    )
    return get_final_product(repo, final_product_id)


def _set_status(repo: FinalProductRepository, final_product_id: int, status: str) -> FinalProduct:
    final_product = repo.get_by_id(final_product_id)
    if final_product is None:
        raise EntityNotFoundException("Final product not found", details={"id": final_product_id})

    previous = final_product.status
    final_product.status = status
    repo.db.commit()

    logger.info(
        "Final product status changed",
        final_product_id=final_product_id,
        from_status=previous,
        to_status=status,
        tenant_id=repo.tenant_id,
    )
    return get_final_product(repo, final_product_id)


def mark_done(repo: FinalProductRepository, final_product_id: int) -> FinalProduct:
    return _set_status(repo, final_product_id, STATUS_DONE)


def reset_to_pending(repo: FinalProductRepository, final_product_id: int) -> FinalProduct:
    return _set_status(repo, final_product_id, STATUS_PENDING)


def delete_final_product(repo: FinalProductRepository, final_product_id: int) -> dict:
    final_product = repo.get_by_id(final_product_id)
    if final_product is None:
        raise EntityNotFoundException("Final product not found", details={"id": final_product_id})

    try:
        repo.delete_aggregate(final_product)
        repo.db.commit()
    except Exception:
        repo.rollback()
        raise

    logger.info("Final product deleted", final_product_id=final_product_id, tenant_id=repo.tenant_id)
    return {"message": "Final product deleted successfully"}

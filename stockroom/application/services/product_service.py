"""Product service — stock products and the bill-of-materials delete guard."""

from typing import List

import structlog

from stockroom.application.services.catalog_service import create_entity, update_entity
from stockroom.core.exceptions import EntityNotFoundException, ReferencedEntityException
from stockroom.domain.models.product import Product
from stockroom.domain.repositories.product_repository import ProductRepository
from stockroom.domain.schemas.product import ProductCreate, ProductFilter, ProductUpdate

logger = structlog.get_logger(__name__)


def get_products(repo: ProductRepository, filters: ProductFilter) -> List[Product]:
    return repo.get_with_filters(filters)


def get_product(repo: ProductRepository, product_id: int) -> Product:
    product = repo.get_with_relations(product_id)
    if product is None:
        raise EntityNotFoundException("Product not found", details={"id": product_id})
    return product


def create_product(repo: ProductRepository, payload: ProductCreate) -> Product:
    product = create_entity(repo, payload, "Product", unique_field="barcode")
    return repo.get_with_relations(product.id)


def update_product(repo: ProductRepository, product_id: int, payload: ProductUpdate) -> Product:
    update_entity(repo, product_id, payload, "Product", unique_field="barcode")
    return repo.get_with_relations(product_id)


def delete_product(repo: ProductRepository, product_id: int) -> dict:
    """Delete a product unless a final product's components still use it."""
    product = repo.get_by_id(product_id)
    if product is None:
        raise EntityNotFoundException("Product not found", details={"id": product_id})

    referencing = repo.get_referencing_final_products(product_id)
    if referencing:
        names = [fp.name for fp in referencing]
        logger.warning(
            "Product delete blocked",
            product_id=product_id,
            tenant_id=repo.tenant_id,
            final_products=names,
        )
        raise ReferencedEntityException(
            f"Cannot delete product '{product.name}': it is used by final product(s): {', '.join(names)}",
            details={
                "product_id": product_id,
                "final_products": [{"id": fp.id, "name": fp.name, "code": fp.code} for fp in referencing],
            },
        )

    repo.delete(product)
    logger.info("Product deleted", product_id=product_id, tenant_id=repo.tenant_id)
    return {"message": "Product deleted successfully"}

"""
SQLAlchemy Implementation of FinalProduct Repository.

Writes in this repository only flush; the composition service owns the
transaction and commits or rolls back the whole aggregate at once.
"""

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from stockroom.domain.models.category import Category
from stockroom.domain.models.client import Client
from stockroom.domain.models.currency import Currency
from stockroom.domain.models.final_product import Component, FinalProduct
from stockroom.domain.models.product import Product
from stockroom.domain.repositories.final_product_repository import FinalProductRepository
from stockroom.domain.schemas.final_product import FinalProductFilter
from stockroom.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyFinalProductRepository(SQLAlchemyRepository[FinalProduct], FinalProductRepository):
    """FinalProduct repository implementation using SQLAlchemy."""

    def __init__(self, db: Session, tenant_id: str):
        super().__init__(db, FinalProduct, tenant_id)

    def _with_relations(self):
        tenant = self.tenant_id
        return self.scoped().options(
            selectinload(FinalProduct.currency.and_(Currency.user_id == tenant)),
            selectinload(FinalProduct.client.and_(Client.user_id == tenant)),
            selectinload(FinalProduct.category.and_(Category.user_id == tenant)),
            selectinload(FinalProduct.components.and_(Component.user_id == tenant))
            .selectinload(Component.product.and_(Product.user_id == tenant))
            .selectinload(Product.currency.and_(Currency.user_id == tenant)),
        ).execution_options(populate_existing=True)

    def get_with_relations(self, id: int) -> Optional[FinalProduct]:
        return self._with_relations().filter(FinalProduct.id == id).first()

    def list(self, skip: int = 0, limit: Optional[int] = None) -> List[FinalProduct]:
        query = self._with_relations().order_by(*self.order_by).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_with_filters(self, filters: FinalProductFilter) -> List[FinalProduct]:
        """Get final product graphs with filtering, newest first."""
        query = self._with_relations()

        if filters.status:
            query = query.filter(FinalProduct.status == filters.status)
        if filters.client_id:
            query = query.filter(FinalProduct.client_id == filters.client_id)

        # Orders without an explicit date fall back to their creation day
        effective_date = func.coalesce(FinalProduct.order_date, func.date(FinalProduct.created_at))
        if filters.date_from:
            query = query.filter(effective_date >= filters.date_from)
        if filters.date_to:
            query = query.filter(effective_date <= filters.date_to)

        return query.order_by(*self.order_by).all()

    def get_product_for_update(self, product_id: int) -> Optional[Product]:
        return (
            self.db.query(Product)
            .filter(Product.id == product_id, Product.user_id == self.tenant_id)
            .first()
        )

    def add(self, final_product: FinalProduct) -> FinalProduct:
        final_product.user_id = self.tenant_id
        self.db.add(final_product)
        self.db.flush()
        return final_product

    def delete_components(self, final_product: FinalProduct) -> int:
        return (
            self.db.query(Component)
            .filter(
                Component.final_product_id == final_product.id,
                Component.user_id == self.tenant_id,
            )
            .delete(synchronize_session=False)
        )

    def replace_components(self, final_product: FinalProduct, components: List[Component]) -> None:
        self.delete_components(final_product)
        for component in components:
            component.final_product_id = final_product.id
            component.user_id = self.tenant_id
            self.db.add(component)
        self.db.flush()

    def delete_aggregate(self, final_product: FinalProduct) -> None:
        self.delete_components(final_product)
        self.db.delete(final_product)
        self.db.flush()

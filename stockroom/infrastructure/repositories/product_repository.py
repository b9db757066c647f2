"""
SQLAlchemy Implementation of Product Repository.
"""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from stockroom.domain.models.brand import Brand
from stockroom.domain.models.category import Category
from stockroom.domain.models.currency import Currency
from stockroom.domain.models.final_product import Component, FinalProduct
from stockroom.domain.models.product import Product
from stockroom.domain.repositories.product_repository import ProductRepository
from stockroom.domain.schemas.product import ProductFilter
from stockroom.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product], ProductRepository):
    """Product repository implementation using SQLAlchemy."""

    def __init__(self, db: Session, tenant_id: str):
        super().__init__(db, Product, tenant_id)

    def _with_relations(self):
        # Joined rows are re-filtered by tenant so a foreign id never leaks another tenant's row
        return self.scoped().options(
            selectinload(Product.currency.and_(Currency.user_id == self.tenant_id)),
            selectinload(Product.brand.and_(Brand.user_id == self.tenant_id)),
            selectinload(Product.category.and_(Category.user_id == self.tenant_id)),
        ).execution_options(populate_existing=True)

    def get_with_relations(self, id: int) -> Optional[Product]:
        return self._with_relations().filter(Product.id == id).first()

    def list(self, skip: int = 0, limit: Optional[int] = None) -> List[Product]:
        query = self._with_relations().order_by(*self.order_by).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_with_filters(self, filters: ProductFilter) -> List[Product]:
        """Get products with search and filtering, newest first."""
        query = self._with_relations()

        if filters.search:
            like = f"%{filters.search}%"
            query = query.filter(or_(Product.name.ilike(like), Product.barcode.ilike(like)))
        if filters.brand_id:
            query = query.filter(Product.brand_id == filters.brand_id)
        if filters.category_id:
            query = query.filter(Product.category_id == filters.category_id)

        return query.order_by(*self.order_by).all()

    def get_referencing_final_products(self, product_id: int) -> List[FinalProduct]:
        return (
            self.db.query(FinalProduct)
            .join(Component, Component.final_product_id == FinalProduct.id)
            .filter(
                Component.product_id == product_id,
                Component.user_id == self.tenant_id,
                FinalProduct.user_id == self.tenant_id,
            )
            .distinct()
            .order_by(FinalProduct.name)
            .all()
        )

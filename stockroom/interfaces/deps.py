"""
API Dependencies — tenant-bound repositories.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from stockroom.domain.models.brand import Brand
from stockroom.domain.models.category import Category
from stockroom.domain.models.client import Client
from stockroom.domain.models.currency import Currency
from stockroom.domain.repositories.final_product_repository import FinalProductRepository
from stockroom.domain.repositories.product_repository import ProductRepository
from stockroom.infrastructure.database import get_db
from stockroom.infrastructure.repositories.base_repository import SQLAlchemyRepository
from stockroom.infrastructure.repositories.final_product_repository import SQLAlchemyFinalProductRepository
from stockroom.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from stockroom.interfaces.api.deps import get_tenant_id


def get_category_repository(
    db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)
) -> SQLAlchemyRepository[Category]:
    return SQLAlchemyRepository(db, Category, tenant_id, order_by=[Category.name.asc(), Category.id.asc()])


def get_brand_repository(
    db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)
) -> SQLAlchemyRepository[Brand]:
    return SQLAlchemyRepository(db, Brand, tenant_id, order_by=[Brand.name.asc(), Brand.id.asc()])


def get_currency_repository(
    db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)
) -> SQLAlchemyRepository[Currency]:
    return SQLAlchemyRepository(db, Currency, tenant_id)


def get_client_repository(
    db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)
) -> SQLAlchemyRepository[Client]:
    return SQLAlchemyRepository(db, Client, tenant_id)


def get_product_repository(
    db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)
) -> ProductRepository:
    """Get product repository instance."""
    return SQLAlchemyProductRepository(db, tenant_id)


def get_final_product_repository(
    db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)
) -> FinalProductRepository:
    """Get final product repository instance."""
    return SQLAlchemyFinalProductRepository(db, tenant_id)

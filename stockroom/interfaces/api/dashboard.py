"""Dashboard API — aggregated stats for the frontend dashboard."""

from fastapi import APIRouter, Depends

from stockroom.application.services.dashboard_service import build_stats, sales_by_month, stock_by_month
from stockroom.application.services.final_product_service import get_final_products
from stockroom.application.services.product_service import get_products
from stockroom.domain.repositories.final_product_repository import FinalProductRepository
from stockroom.domain.repositories.product_repository import ProductRepository
from stockroom.domain.schemas.dashboard import DashboardSummary
from stockroom.domain.schemas.final_product import FinalProductFilter, FinalProductRead
from stockroom.domain.schemas.product import ProductFilter
from stockroom.infrastructure.repositories.base_repository import SQLAlchemyRepository
from stockroom.interfaces.api.deps import get_tenant_id
from stockroom.interfaces.deps import (
    get_brand_repository,
    get_category_repository,
    get_client_repository,
    get_final_product_repository,
    get_product_repository,
)

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"], dependencies=[Depends(get_tenant_id)])

RECENT_LIMIT = 5


@router.get("/summary", response_model=DashboardSummary)
def dashboard_summary(
    products_repo: ProductRepository = Depends(get_product_repository),
    final_products_repo: FinalProductRepository = Depends(get_final_product_repository),
    clients_repo: SQLAlchemyRepository = Depends(get_client_repository),
    categories_repo: SQLAlchemyRepository = Depends(get_category_repository),
    brands_repo: SQLAlchemyRepository = Depends(get_brand_repository),
):
    """All dashboard data in a single request."""
    products = get_products(products_repo, ProductFilter())
    final_products = get_final_products(final_products_repo, FinalProductFilter())

    return DashboardSummary(
        stats=build_stats(
            products,
            final_products,
            total_clients=clients_repo.count(),
            total_categories=categories_repo.count(),
            total_brands=brands_repo.count(),
        ),
        recent_final_products=[FinalProductRead.model_validate(fp) for fp in final_products[:RECENT_LIMIT]],
        sales_by_month=sales_by_month(final_products),
        stock_by_month=stock_by_month(products),
    )

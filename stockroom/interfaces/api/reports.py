"""Reports API — XLSX exports of final products and inventory."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Response

from stockroom.application.services.final_product_service import get_current_date, get_final_products
from stockroom.application.services.product_service import get_products
from stockroom.application.services.report_service import build_final_products_report, build_products_report
from stockroom.core.exceptions import EntityNotFoundException, ValidationFailedError
from stockroom.domain.repositories.final_product_repository import FinalProductRepository
from stockroom.domain.repositories.product_repository import ProductRepository
from stockroom.domain.schemas.final_product import FinalProductFilter
from stockroom.domain.schemas.product import ProductFilter
from stockroom.interfaces.api.deps import get_tenant_id
from stockroom.interfaces.deps import get_final_product_repository, get_product_repository

router = APIRouter(prefix="/api/reports", tags=["Reports"], dependencies=[Depends(get_tenant_id)])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _xlsx_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/final-products.xlsx")
def final_products_report(
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    repo: FinalProductRepository = Depends(get_final_product_repository),
):
    if date_from and date_to and date_from > date_to:
        raise ValidationFailedError("date_from must not be after date_to", field="date_from")

    final_products = get_final_products(repo, FinalProductFilter(date_from=date_from, date_to=date_to))
    if not final_products:
        raise EntityNotFoundException("No final products found in the selected date range")

    range_label = f"{date_from or 'start'}_to_{date_to or 'today'}"
    filename = f"general_report_{range_label}_{get_current_date().isoformat()}.xlsx"
    return _xlsx_response(build_final_products_report(final_products), filename)


@router.get("/products.xlsx")
def products_report(repo: ProductRepository = Depends(get_product_repository)):
    products = get_products(repo, ProductFilter())
    if not products:
        raise EntityNotFoundException("No products found in inventory")

    filename = f"products_inventory_report_{get_current_date().isoformat()}.xlsx"
    return _xlsx_response(build_products_report(products), filename)

"""Dashboard service — aggregated stats for the frontend dashboard."""

from datetime import date
from decimal import Decimal
from typing import Iterable, List

from stockroom.application.services.final_product_service import get_current_date
from stockroom.application.services.pricing import quantize_area, quantize_money, to_decimal
from stockroom.application.services.report_service import effective_date, final_product_total
from stockroom.domain.models.final_product import FinalProduct, STATUS_DONE
from stockroom.domain.models.product import Product
from stockroom.domain.schemas.dashboard import DashboardStats, MonthlySales, MonthlyStock

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def last_months(today: date, count: int = 6) -> List[tuple[int, int]]:
    """(year, month) pairs for the last `count` months, oldest first, current month included."""
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def build_stats(
    products: List[Product],
    final_products: List[FinalProduct],
    total_clients: int,
    total_categories: int,
    total_brands: int,
) -> DashboardStats:
    total_square_meters = sum((to_decimal(p.square_meters) for p in products), Decimal("0"))
    total_value = sum(
        (to_decimal(p.square_meters) * to_decimal(p.price_per_square_meter) for p in products),
        Decimal("0"),
    )
    done = sum(1 for fp in final_products if fp.status == STATUS_DONE)
    return DashboardStats(
        total_products=len(products),
        total_final_products=len(final_products),
        pending_final_products=len(final_products) - done,
        done_final_products=done,
        total_clients=total_clients,
        total_categories=total_categories,
        total_brands=total_brands,
        total_square_meters=quantize_area(total_square_meters),
        total_value=quantize_money(total_value),
    )


def sales_by_month(final_products: Iterable[FinalProduct], today: date = None) -> List[MonthlySales]:
    """Totals (surcharge included) of done final products per month, last 6 months."""
    months = last_months(today or get_current_date())
    totals = {key: Decimal("0") for key in months}
    for fp in final_products:
        if fp.status != STATUS_DONE:
            continue
        when = effective_date(fp)
        if when is None:
            continue
        key = (when.year, when.month)
        if key in totals:
            totals[key] += final_product_total(fp)
    return [MonthlySales(month=MONTH_NAMES[m - 1], price=quantize_money(totals[(y, m)])) for y, m in months]


def stock_by_month(products: Iterable[Product], today: date = None) -> List[MonthlyStock]:
    """Square meters of products added per month, last 6 months."""
    months = last_months(today or get_current_date())
    totals = {key: Decimal("0") for key in months}
    for p in products:
        if p.created_at is None:
            continue
        key = (p.created_at.year, p.created_at.month)
        if key in totals:
            totals[key] += to_decimal(p.square_meters)
    return [MonthlyStock(month=MONTH_NAMES[m - 1], m2=quantize_area(totals[(y, m)])) for y, m in months]

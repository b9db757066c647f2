"""Pydantic schemas for the dashboard summary."""

from decimal import Decimal

from pydantic import BaseModel

from stockroom.domain.schemas.final_product import FinalProductRead


class DashboardStats(BaseModel):
    total_products: int
    total_final_products: int
    pending_final_products: int
    done_final_products: int
    total_clients: int
    total_categories: int
    total_brands: int
    total_square_meters: Decimal
    total_value: Decimal


class MonthlySales(BaseModel):
    month: str
    price: Decimal


class MonthlyStock(BaseModel):
    month: str
    m2: Decimal


class DashboardSummary(BaseModel):
    stats: DashboardStats
    recent_final_products: list[FinalProductRead]
    sales_by_month: list[MonthlySales]
    stock_by_month: list[MonthlyStock]

"""Pydantic schemas for Product domain."""

from decimal import Decimal
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from stockroom.domain.schemas.common import reject_null
from stockroom.domain.schemas.currency import CurrencyRef
from stockroom.domain.schemas.taxonomy import TagRef


class ProductBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    barcode: str = Field(min_length=1, max_length=255)
    price_per_square_meter: Decimal = Field(ge=0, max_digits=14, decimal_places=2)
    square_meters: Decimal = Field(default=Decimal("0"), ge=0, max_digits=14, decimal_places=4)
    description: Optional[str] = None
    category_id: Optional[int] = None
    brand_id: Optional[int] = None
    currency_id: Optional[int] = None

    model_config = {"str_strip_whitespace": True}


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    barcode: Optional[str] = Field(default=None, min_length=1, max_length=255)
    price_per_square_meter: Optional[Decimal] = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    square_meters: Optional[Decimal] = Field(default=None, ge=0, max_digits=14, decimal_places=4)
    description: Optional[str] = None
    category_id: Optional[int] = None
    brand_id: Optional[int] = None
    currency_id: Optional[int] = None

    model_config = {"str_strip_whitespace": True}

    not_null = reject_null("name", "barcode", "price_per_square_meter", "square_meters")


class ProductSummary(BaseModel):
    """Product as embedded in a component line."""
    id: int
    name: str
    barcode: str
    price_per_square_meter: Decimal
    square_meters: Decimal
    description: Optional[str] = None
    currency: Optional[CurrencyRef] = None

    model_config = {"from_attributes": True}


class ProductRead(ProductSummary):
    category_id: Optional[int] = None
    brand_id: Optional[int] = None
    currency_id: Optional[int] = None
    category: Optional[TagRef] = None
    brand: Optional[TagRef] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductFilter(BaseModel):
    search: Optional[str] = None
    brand_id: Optional[int] = None
    category_id: Optional[int] = None

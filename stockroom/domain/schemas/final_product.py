"""Pydantic schemas for FinalProduct and its Components."""

from decimal import Decimal
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, computed_field

from stockroom.application.services.pricing import summarize
from stockroom.domain.schemas.client import ClientRef
from stockroom.domain.schemas.common import reject_null
from stockroom.domain.schemas.currency import CurrencyRef
from stockroom.domain.schemas.product import ProductSummary
from stockroom.domain.schemas.taxonomy import TagRef


class ComponentIn(BaseModel):
    # The single-page client posts the product id under "product"
    product_id: int = Field(validation_alias=AliasChoices("product_id", "product"))
    length: Decimal = Field(ge=Decimal("0.01"), max_digits=10, decimal_places=2)
    width: Decimal = Field(ge=Decimal("0.01"), max_digits=10, decimal_places=2)
    quantity: Decimal = Field(default=Decimal("1"), ge=Decimal("0.01"), max_digits=10, decimal_places=2)
    image: Optional[str] = Field(default=None, max_length=500)


class ComponentRead(BaseModel):
    id: int
    product_id: int
    length: Decimal
    width: Decimal
    quantity: Decimal
    square_meters: Decimal
    total_meters: Decimal
    unit_price: Decimal
    total_price: Decimal
    image: Optional[str] = None
    product: Optional[ProductSummary] = None

    model_config = {"from_attributes": True}


class FinalProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    currency_id: Optional[int] = None
    client_id: Optional[int] = None
    category_id: Optional[int] = None
    order_date: Optional[date] = None
    apply_tax: bool = True
    profit_margin: Decimal = Field(default=Decimal("0"), ge=0, le=1000, decimal_places=2)
    components: list[ComponentIn] = Field(default_factory=list)

    model_config = {"str_strip_whitespace": True}


class FinalProductUpdate(BaseModel):
    """Partial update. `components`, when present, replaces the whole bill of materials."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    code: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    currency_id: Optional[int] = None
    client_id: Optional[int] = None
    category_id: Optional[int] = None
    order_date: Optional[date] = None
    apply_tax: Optional[bool] = None
    profit_margin: Optional[Decimal] = Field(default=None, ge=0, le=1000, decimal_places=2)
    components: Optional[list[ComponentIn]] = None

    model_config = {"str_strip_whitespace": True}

    not_null = reject_null("name", "code", "apply_tax", "profit_margin")


class PriceSummaryRead(BaseModel):
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    selling_price: Decimal


class FinalProductRead(BaseModel):
    id: int
    name: str
    code: str
    description: Optional[str] = None
    currency_id: Optional[int] = None
    client_id: Optional[int] = None
    category_id: Optional[int] = None
    status: Literal["pending", "done"]
    order_date: Optional[date] = None
    apply_tax: bool
    profit_margin: Decimal
    currency: Optional[CurrencyRef] = None
    client: Optional[ClientRef] = None
    category: Optional[TagRef] = None
    components: list[ComponentRead] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def pricing(self) -> PriceSummaryRead:
        """Derived totals; never persisted."""
        summary = summarize(
            (c.total_price for c in self.components),
            apply_tax=self.apply_tax,
            profit_margin=self.profit_margin,
        )
        return PriceSummaryRead(
            subtotal=summary.subtotal,
            tax=summary.tax,
            total=summary.total,
            selling_price=summary.selling_price,
        )


class FinalProductFilter(BaseModel):
    status: Optional[Literal["pending", "done"]] = None
    client_id: Optional[int] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

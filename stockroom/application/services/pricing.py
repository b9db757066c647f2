"""Pricing — component area/price figures and final product totals.

All arithmetic is done on ``Decimal`` so repeated recomputation never drifts:

- area per unit  = length × width
- total area     = area per unit × quantity
- total price    = total area × product price per m²
- total          = Σ component total price, × (1 + surcharge) when the surcharge applies
- selling price  = total × (1 + profit margin / 100)
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from stockroom.config import get_settings

AREA_QUANT = Decimal("0.0001")
MONEY_QUANT = Decimal("0.01")
DIMENSION_QUANT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from expanding into binary noise
    return Decimal(str(value))


def quantize_area(value) -> Decimal:
    return to_decimal(value).quantize(AREA_QUANT, rounding=ROUND_HALF_UP)


def quantize_money(value) -> Decimal:
    return to_decimal(value).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def quantize_dimension(value) -> Decimal:
    return to_decimal(value).quantize(DIMENSION_QUANT, rounding=ROUND_HALF_UP)


def surcharge_rate() -> Decimal:
    return to_decimal(get_settings().SURCHARGE_RATE)


@dataclass(frozen=True)
class ComponentFigures:
    length: Decimal
    width: Decimal
    quantity: Decimal
    area_per_unit: Decimal
    total_area: Decimal
    unit_price: Decimal
    total_price: Decimal


@dataclass(frozen=True)
class PriceSummary:
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    selling_price: Decimal


def area_per_unit(length, width) -> Decimal:
    return quantize_area(to_decimal(length) * to_decimal(width))


def compute_component(length, width, quantity, price_per_square_meter) -> ComponentFigures:
    """Derive the stored figures of one component line."""
    length = quantize_dimension(length)
    width = quantize_dimension(width)
    quantity = quantize_dimension(quantity if quantity is not None else 1)
    unit_price = quantize_money(price_per_square_meter)

    per_unit = length * width
    total_area = per_unit * quantity
    return ComponentFigures(
        length=length,
        width=width,
        quantity=quantity,
        area_per_unit=quantize_area(per_unit),
        total_area=quantize_area(total_area),
        unit_price=unit_price,
        total_price=quantize_money(total_area * unit_price),
    )


def summarize(
    component_prices: Iterable,
    apply_tax: bool,
    profit_margin=None,
    rate: Optional[Decimal] = None,
) -> PriceSummary:
    rate = surcharge_rate() if rate is None else to_decimal(rate)
    subtotal = sum((to_decimal(p) for p in component_prices), Decimal("0"))
    tax = subtotal * rate if apply_tax else Decimal("0")
    total = subtotal + tax
    margin = to_decimal(profit_margin)
    selling_price = total * (Decimal("1") + margin / Decimal("100"))
    return PriceSummary(
        subtotal=quantize_money(subtotal),
        tax=quantize_money(tax),
        total=quantize_money(total),
        selling_price=quantize_money(selling_price),
    )

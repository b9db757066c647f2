"""Spreadsheet reports — turns already-fetched entity graphs into XLSX workbooks.

Pure read-side: nothing here validates or mutates data.
"""

import io
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from stockroom.application.services.pricing import summarize
from stockroom.domain.models.final_product import FinalProduct, STATUS_DONE
from stockroom.domain.models.product import Product

DEFAULT_SYMBOL = "$"

TITLE_FONT = Font(color="0000FF", bold=True, size=16)
HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
TOTAL_FONT = Font(color="FFFFFF", bold=True, size=12)
HEADER_FILL = PatternFill(fill_type="solid", fgColor="0066CC")
THIN = Side(style="thin", color="000000")
BORDER = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)
CENTER = Alignment(horizontal="center", vertical="center")

# Title row, a blank row, then the table
TABLE_START_ROW = 3


def format_price(amount, symbol: Optional[str] = None) -> str:
    return f"{symbol or DEFAULT_SYMBOL}{Decimal(amount):,.2f}"


def effective_date(final_product: FinalProduct) -> Optional[date]:
    if final_product.order_date:
        return final_product.order_date
    if final_product.created_at:
        return final_product.created_at.date()
    return None


def final_product_total(final_product: FinalProduct) -> Decimal:
    return summarize(
        (c.total_price for c in final_product.components),
        apply_tax=final_product.apply_tax,
        profit_margin=None,
    ).total


def final_products_frame(final_products: Iterable[FinalProduct]) -> tuple[pd.DataFrame, Decimal]:
    rows = []
    grand_total = Decimal("0")
    for fp in final_products:
        total = final_product_total(fp)
        grand_total += total
        when = effective_date(fp)
        rows.append(
            {
                "Final Product": fp.name,
                "Date": when.isoformat() if when else "N/A",
                "State": "Done" if fp.status == STATUS_DONE else "Pending",
                "Total": format_price(total, fp.currency.symbol if fp.currency else None),
            }
        )
    return pd.DataFrame(rows, columns=["Final Product", "Date", "State", "Total"]), grand_total


def products_frame(products: Iterable[Product]) -> pd.DataFrame:
    rows = [
        {
            "Name": p.name,
            "Code": p.barcode or "N/A",
            "Price per m²": format_price(p.price_per_square_meter or 0, p.currency.symbol if p.currency else None),
            "Square Meters (m²)": f"{Decimal(p.square_meters or 0):.2f}",
            "Brand": p.brand.name if p.brand else "N/A",
        }
        for p in products
    ]
    return pd.DataFrame(rows, columns=["Name", "Code", "Price per m²", "Square Meters (m²)", "Brand"])


def _style_sheet(ws, title: str, n_columns: int, n_rows: int, widths: list[int]) -> None:
    ws.cell(row=1, column=1, value=title).font = TITLE_FONT

    for col in range(1, n_columns + 1):
        header = ws.cell(row=TABLE_START_ROW, column=col)
        header.font = HEADER_FONT
        header.fill = HEADER_FILL
        header.alignment = CENTER
        header.border = BORDER
        for row in range(TABLE_START_ROW + 1, TABLE_START_ROW + 1 + n_rows):
            ws.cell(row=row, column=col).border = BORDER

    for col, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(col)].width = width


def _write_workbook(df: pd.DataFrame, sheet_name: str, title: str, widths: list[int], total: Optional[str] = None) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False, startrow=TABLE_START_ROW - 1)
        ws = writer.sheets[sheet_name]
        _style_sheet(ws, title, len(df.columns), len(df), widths)

        if total is not None:
            total_row = TABLE_START_ROW + len(df) + 2
            ws.cell(row=total_row, column=1, value="TOTAL")
            ws.cell(row=total_row, column=len(df.columns), value=total)
            for col in range(1, len(df.columns) + 1):
                cell = ws.cell(row=total_row, column=col)
                cell.font = TOTAL_FONT
                cell.fill = HEADER_FILL
                cell.alignment = CENTER
                cell.border = BORDER
    return buffer.getvalue()


def build_final_products_report(final_products: Iterable[FinalProduct]) -> bytes:
    """'General report': one row per final product plus a grand TOTAL row."""
    df, grand_total = final_products_frame(final_products)
    return _write_workbook(
        df,
        sheet_name="General Report",
        title="General report",
        widths=[30, 15, 12, 18],
        total=format_price(grand_total),
    )


def build_products_report(products: Iterable[Product]) -> bytes:
    df = products_frame(products)
    return _write_workbook(
        df,
        sheet_name="Products Inventory",
        title="Products Inventory Report",
        widths=[30, 20, 18, 20, 20],
    )
